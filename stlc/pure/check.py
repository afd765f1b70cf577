"""Type checker. Walks a term and returns its type together with every diagnostic found on the way.

Diagnostics are plain strings accumulated in evaluation order (condition, then, else; left before right; outer before
inner). A term is well-typed if and only if its diagnostics list is empty. Checking continues past a local error
wherever the structure allows it, with one exception: an application whose left side has no type does not check its
right side.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from stlc.lang.error import UnboundIdentifier, UnknownTerm
from stlc.pure.environment import Environment
from stlc.pure.terms import Abstraction, Application, Arithmetic, Condition, Identifier, IsZero, Literal
from stlc.pure.types import Arrow, BOOLEAN, NATURAL, Type, type_eq


@dataclass
class Checked:
    """Result of checking a term: its type (None if the term is ill-typed) and the diagnostics found."""
    type: Optional[Type] = None
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self):
        return not self.diagnostics


def check(term, env=None):
    """Type checks term in env. A fresh Environment is used if env is None."""
    if env is None:
        env = Environment()
    return _check(term, env, [])


def _check(term, env, diagnostics):
    # by definition, an empty program is correct
    if term is None:
        return Checked(None, diagnostics)

    if isinstance(term, Literal):
        if isinstance(term.value, bool):
            return Checked(BOOLEAN, diagnostics)
        elif isinstance(term.value, int) and term.value >= 0:
            return Checked(NATURAL, diagnostics)
        diagnostics.append(f"unknown literal type: {term.value!r}")
        return Checked(None, diagnostics)

    elif isinstance(term, Identifier):
        try:
            return Checked(env.lookup(term.name), diagnostics)
        except UnboundIdentifier as error:
            diagnostics.append(error.msg)
            return Checked(None, diagnostics)

    elif isinstance(term, Condition):
        return _check_condition(term, env, diagnostics)

    elif isinstance(term, Abstraction):
        if term.body is None:
            diagnostics.append(f"missing body of function of '{term.arg_name}'")
            return Checked(None, diagnostics)

        with env.scope({term.arg_name: term.arg_type}):
            body_type = _check(term.body, env, diagnostics).type

        if body_type is None:
            return Checked(None, diagnostics)
        return Checked(Arrow(term.arg_type, body_type), diagnostics)

    elif isinstance(term, IsZero):
        if _expect_natural(term.expression, "iszero", env, diagnostics):
            return Checked(BOOLEAN, diagnostics)
        return Checked(None, diagnostics)

    elif isinstance(term, Arithmetic):
        if _expect_natural(term.expression, term.operator, env, diagnostics):
            return Checked(NATURAL, diagnostics)
        return Checked(None, diagnostics)

    elif isinstance(term, Application):
        return _check_application(term, env, diagnostics)

    raise UnknownTerm(term, "type checker")


def _check_condition(term, env, diagnostics):
    """if-then-else is correct if the condition is Boolean and both branches have the same type."""
    if term.condition is None or term.then is None or term.el is None:
        diagnostics.append("conditional expression is missing its condition or one of its branches")
        return Checked(None, diagnostics)

    ok = True
    condition_type = _check(term.condition, env, diagnostics).type
    if condition_type is None:
        ok = False
    elif not type_eq(condition_type, BOOLEAN):
        diagnostics.append(f"condition must be Boolean, got {condition_type}")
        ok = False

    # both branches are checked even if the condition is wrong
    then_type = _check(term.then, env, diagnostics).type
    else_type = _check(term.el, env, diagnostics).type
    if then_type is None or else_type is None:
        return Checked(None, diagnostics)

    if not type_eq(then_type, else_type):
        diagnostics.append(f"branches diverge in type: then is {then_type}, else is {else_type}")
        return Checked(None, diagnostics)

    # then and else are equal here, so the then branch's type stands for both
    return Checked(then_type if ok else None, diagnostics)


def _check_application(term, env, diagnostics):
    """f x is correct if f: A -> B and x: A, and then has type B. A call without argument is allowed for any f."""
    if term.left is None:
        diagnostics.append("application is missing its function")
        return Checked(None, diagnostics)

    left_type = _check(term.left, env, diagnostics).type
    if left_type is None:
        return Checked(None, diagnostics)

    if not isinstance(left_type, Arrow):
        diagnostics.append(f"incorrect application type: '{term.left}' is {left_type}, not a function")
        return Checked(None, diagnostics)

    if term.right is None:
        return Checked(left_type.result, diagnostics)

    right_type = _check(term.right, env, diagnostics).type
    if right_type is None:
        return Checked(None, diagnostics)

    if not type_eq(left_type.argument, right_type):
        diagnostics.append(f"incorrect application type: expected {left_type.argument}, got {right_type}")
        return Checked(None, diagnostics)
    return Checked(left_type.result, diagnostics)


def _expect_natural(operand, operation, env, diagnostics):
    """Checks operand and returns whether or not it is Natural. Only a known, wrong type is diagnosed here: an operand
    without type has been diagnosed already.
    """
    if operand is None:
        diagnostics.append(f"missing operand of {operation}")
        return False

    operand_type = _check(operand, env, diagnostics).type
    if operand_type is None:
        return False
    if not type_eq(operand_type, NATURAL):
        diagnostics.append(f"incorrect type of {operation}: expected Natural, got {operand_type}")
        return False
    return True
