"""Types of the simply typed lambda calculus with booleans and naturals.

```
<type> ::= "Natural" | "Boolean"       ; "primitive"
         | <type> "->" <type>          ; "arrow", associating by right: A -> B -> C = A -> (B -> C)
```

Curried multi-argument functions are nested arrows, so a function of two naturals returning a boolean has type
Arrow(NATURAL, Arrow(NATURAL, BOOLEAN)).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Type(ABC):
    """Superclass of every stlc type. Types are immutable and compared structurally."""

    @abstractmethod
    def equals(self, other):
        """Whether or not self and other are structurally the same type."""

    def __eq__(self, other):
        return isinstance(other, Type) and self.equals(other)

    def __hash__(self):
        return hash(str(self))


@dataclass(frozen=True, eq=False)
class Primitive(Type):
    """Natural or Boolean."""
    name: str

    def equals(self, other):
        return isinstance(other, Primitive) and self.name == other.name

    def __str__(self):
        return self.name


@dataclass(frozen=True, eq=False)
class Arrow(Type):
    """Function type from argument to result."""
    argument: Type
    result: Type

    def equals(self, other):
        return isinstance(other, Arrow) and type_eq(self.argument, other.argument) and \
            type_eq(self.result, other.result)

    def __str__(self):
        if isinstance(self.argument, Arrow):
            return f"({self.argument}) -> {self.result}"
        return f"{self.argument} -> {self.result}"


NATURAL = Primitive("Natural")
BOOLEAN = Primitive("Boolean")


def type_eq(a, b):
    """Checks if the 2 given types are the same. None (no type) is never equal to anything, itself included."""
    if a is None or b is None:
        return False
    return a.equals(b)


def arrow(*types):
    """Builds the curried function type of types, e.g. arrow(NATURAL, NATURAL, BOOLEAN) is Natural -> Natural ->
    Boolean.
    """
    if not types:
        raise ValueError("arrow expects at least one type")

    *arguments, result = types
    for argument in reversed(arguments):
        result = Arrow(argument, result)
    return result
