"""Abstract syntax tree of the simply typed lambda calculus extended with booleans and naturals.

Formally, the terms can be defined as

```
<term> ::= <natural> | "true" | "false"              ; "literal"
         | <name>                                    ; "identifier"
         | "if" <term> "then" <term> "else" <term>   ; "condition"
         | "λ" <name> ":" <type> "." <term>          ; "abstraction"
                                                     ; - exactly one argument, whose type must be given
         | <term> <term>                             ; "application"
                                                     ; - associating by left: f x y = ((f x) y)
         | "iszero" <term>                           ; "iszero"
         | ("succ" | "pred") <term>                  ; "arithmetic"
```

Terms are immutable and tree-shaped. The checker, the evaluator and the code generator (check.py, evaluate.py and
codegen.py) each walk them independently; none of them mutates a term.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from stlc.pure.types import Type


class Operator(str, Enum):
    """Arithmetic operators on naturals."""
    SUCC = "succ"
    PRED = "pred"

    def __str__(self):
        return self.value


class Term(ABC):
    """Superclass that represents any stlc term."""

    @property
    @abstractmethod
    def nodes(self):
        """Direct sub terms of this term, left to right. Missing sub terms are skipped."""

    @property
    def expr(self):
        """Surface syntax of this term. Missing sub terms are left out, so only a term without missing sub terms parses
        back to an equal term.
        """
        return str(self)

    @property
    def atomic(self):
        """Whether or not this term can be used as an operand without surrounding parentheses."""
        return False

    def display(self, indents=0):
        """Recursively displays term tree with readable format.

        Format:
        <Term>(expr='<expr>', nodes=[
            <Term>(expr='<expr>', nodes=[
                ...
                <Term>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    @staticmethod
    def operand(term):
        """Returns expr of term, parenthesized if term is not atomic."""
        if term is None:
            return ""
        return term.expr if term.atomic else f"({term.expr})"


@dataclass(frozen=True, eq=False)
class Literal(Term):
    value: Union[int, bool]

    def __eq__(self, other):
        # 0 == False in Python, but not in stlc
        return isinstance(other, Literal) and type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self):
        return hash((type(self.value), self.value))

    @property
    def nodes(self):
        return []

    @property
    def atomic(self):
        return True

    def __str__(self):
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


@dataclass(frozen=True)
class Identifier(Term):
    name: str

    @property
    def nodes(self):
        return []

    @property
    def atomic(self):
        return True

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Condition(Term):
    """if condition then then else el. el stands in for the reserved word else."""
    condition: Optional[Term]
    then: Optional[Term]
    el: Optional[Term]

    @property
    def nodes(self):
        return [node for node in (self.condition, self.then, self.el) if node is not None]

    def __str__(self):
        return f"if {_text(self.condition)} then {_text(self.then)} else {_text(self.el)}"


@dataclass(frozen=True)
class Abstraction(Term):
    """Function literal of one typed argument. The body extends as far right as possible."""
    arg_name: str
    arg_type: Type
    body: Optional[Term]

    @property
    def nodes(self):
        return [self.body] if self.body is not None else []

    def __str__(self):
        return f"λ{self.arg_name}: {self.arg_type}. {_text(self.body)}"


@dataclass(frozen=True)
class Application(Term):
    """left applied to right. right may be None, which is a call without argument."""
    left: Optional[Term]
    right: Optional[Term] = None

    @property
    def nodes(self):
        return [node for node in (self.left, self.right) if node is not None]

    def __str__(self):
        left = self.left.expr if isinstance(self.left, (Application, IsZero, Arithmetic)) else Term.operand(self.left)
        if self.right is None:
            return f"{left} ()"
        right = self.right.expr if isinstance(self.right, (IsZero, Arithmetic)) else Term.operand(self.right)
        return f"{left} {right}"


@dataclass(frozen=True)
class IsZero(Term):
    expression: Optional[Term]

    @property
    def nodes(self):
        return [self.expression] if self.expression is not None else []

    def __str__(self):
        return f"iszero {_unary_operand(self.expression)}"


@dataclass(frozen=True)
class Arithmetic(Term):
    operator: Operator
    expression: Optional[Term]

    @property
    def nodes(self):
        return [self.expression] if self.expression is not None else []

    def __str__(self):
        return f"{self.operator} {_unary_operand(self.expression)}"


def _unary_operand(term):
    """Operands of iszero/succ/pred may themselves be unary terms without parentheses: succ succ 0."""
    if isinstance(term, (IsZero, Arithmetic)):
        return term.expr
    return Term.operand(term)


def _text(term):
    return "" if term is None else term.expr
