"""Evaluator. Computes the value of a term that already passed type checking: a natural (int), a boolean or a Closure.
Evaluation of an ill-typed term is undefined; the evaluator does not check types again.
"""

from stlc.lang.error import EvaluationError, UnknownTerm
from stlc.pure.environment import Environment
from stlc.pure.terms import Abstraction, Application, Arithmetic, Condition, Identifier, IsZero, Literal, Operator


class Closure:
    """Runtime value of an Abstraction: its argument and body together with the scopes active at its creation."""

    def __init__(self, abstraction, env):
        self.abstraction = abstraction
        self.env = env.snapshot()

    def __call__(self, value):
        """Binds the argument in a fresh scope and evaluates the body in it. The scope is gone once this returns."""
        with self.env.scope({self.abstraction.arg_name: value}):
            return evaluate(self.abstraction.body, self.env)

    def __repr__(self):
        return f"<closure {self.abstraction.expr}>"


def evaluate(term, env=None):
    """Evaluates term in env. A fresh Environment is used if env is None."""
    if env is None:
        env = Environment()

    # the empty program evaluates to None
    if term is None:
        return None

    if isinstance(term, Literal):
        return term.value

    elif isinstance(term, Identifier):
        return env.lookup(term.name)

    elif isinstance(term, Condition):
        # only the selected branch is evaluated
        if evaluate(term.condition, env):
            return evaluate(term.then, env)
        return evaluate(term.el, env)

    elif isinstance(term, Abstraction):
        return Closure(term, env)

    elif isinstance(term, IsZero):
        return evaluate(term.expression, env) == 0

    elif isinstance(term, Arithmetic):
        value = evaluate(term.expression, env)
        if term.operator == Operator.SUCC:
            return value + 1
        elif term.operator == Operator.PRED:
            return max(value - 1, 0)  # naturals have no negatives: pred 0 = 0
        raise EvaluationError("unknown arithmetic operator '{}'", term.operator)

    elif isinstance(term, Application):
        function = evaluate(term.left, env)
        argument = evaluate(term.right, env)
        if not isinstance(function, Closure):
            raise EvaluationError("'{}' is not a function and cannot be applied", term.left.expr)
        return function(argument)

    raise UnknownTerm(term, "evaluator")


def render(value):
    """Returns value as it would be written in stlc source."""
    if isinstance(value, bool):
        return "true" if value else "false"
    elif value is None:
        return ""
    return str(value)
