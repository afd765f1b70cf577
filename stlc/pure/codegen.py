"""JavaScript code generation. Purely textual: every term is rewritten into a JavaScript expression, no environment is
involved. Output is not formatted.

Generated code evaluates function arguments strictly, whereas the evaluator never evaluates a subterm it does not
need. Programs that rely on that difference are not reproduced faithfully.
"""

from stlc.lang.error import UnknownTerm
from stlc.pure.terms import Abstraction, Application, Arithmetic, Condition, Identifier, IsZero, Literal, Operator


def generate(term):
    """Returns JavaScript expression for term. An empty program gives an empty string."""
    if term is None:
        return ""

    if isinstance(term, Literal):
        if isinstance(term.value, bool):
            return "true" if term.value else "false"
        return str(term.value)

    elif isinstance(term, Identifier):
        return term.name

    elif isinstance(term, Condition):
        condition = _operand(term.condition, Condition)
        then = _operand(term.then, Condition)
        el = _operand(term.el, Condition)
        return f"{condition} ? {then} : {el}"

    elif isinstance(term, Abstraction):
        return f"({term.arg_name} => {{ return {generate(term.body)}; }})"

    elif isinstance(term, IsZero):
        return f"{_operand(term.expression, Condition, IsZero)} === 0"

    elif isinstance(term, Arithmetic):
        value = _operand(term.expression, Condition, IsZero)
        if term.operator == Operator.SUCC:
            return f"{value} + 1"
        elif term.operator == Operator.PRED:
            return f"Math.max({value} - 1, 0)"
        raise UnknownTerm(term.operator, "code generator")

    elif isinstance(term, Application):
        return f"{_operand(term.left, Condition, IsZero, Arithmetic)}({generate(term.right)})"

    raise UnknownTerm(term, "code generator")


def _operand(term, *loose):
    """Generates term, in parentheses if it is one of the loose term types (binds looser than its context)."""
    code = generate(term)
    if isinstance(term, loose):
        return f"({code})"
    return code
