"""
Expression and statement nodes for the SIMPLE language.

Both families are closed: the Expression and Statement unions below list
every variant, and the reduction rules in semantics.py dispatch over
exactly these classes. Nodes are frozen dataclasses, so they compare
structurally, hash, and are never changed after construction. A reduction
step always builds new nodes.

Rendering (str) gives the diagnostic form used in traces:

    str(Add(Number(1), Number(2)))                  -> "1 + 2"
    str(Assign("x", Variable("y")))                 -> "x = y"
    str(While(LessThan(Variable("x"), Number(5)),
              Assign("x", Number(1))))              -> "while (x < 5) { x = 1 }"

repr wraps the rendering in guillemets, e.g. «1 + 2».
This text is not a parseable syntax.
"""

from dataclasses import dataclass
from typing import Union


class Node:
    """Shared rendering behaviour for every SIMPLE node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"«{self}»"


# ============================================================
# Expressions
# ============================================================

@dataclass(frozen=True, repr=False)
class Variable(Node):
    """A named reference, resolved against the environment."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, repr=False)
class Number(Node):
    """An integer value. Terminal."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, repr=False)
class Boolean(Node):
    """A truth value. Terminal."""

    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, repr=False)
class BinaryExpression(Node):
    """Common shape of the four infix operators."""

    left: "Expression"
    right: "Expression"

    symbol = "?"

    def __str__(self) -> str:
        return f"{self.left} {self.symbol} {self.right}"


@dataclass(frozen=True, repr=False)
class Add(BinaryExpression):
    symbol = "+"


@dataclass(frozen=True, repr=False)
class Multiply(BinaryExpression):
    symbol = "*"


@dataclass(frozen=True, repr=False)
class LessThan(BinaryExpression):
    symbol = "<"


@dataclass(frozen=True, repr=False)
class GreaterThan(BinaryExpression):
    symbol = ">"


Expression = Union[Variable, Number, Boolean, Add, Multiply, LessThan, GreaterThan]
TerminalValue = Union[Number, Boolean]

EXPRESSION_TYPES = (Variable, Number, Boolean, Add, Multiply, LessThan, GreaterThan)
TERMINAL_TYPES = (Number, Boolean)


def is_terminal(node) -> bool:
    """True if node is a fully reduced value (Number or Boolean)."""
    return isinstance(node, TERMINAL_TYPES)


# ============================================================
# Statements
# ============================================================

@dataclass(frozen=True, repr=False)
class DoNothing(Node):
    """The terminal statement. Equal only to other DoNothing instances."""

    def __str__(self) -> str:
        return "do-nothing"


@dataclass(frozen=True, repr=False)
class Assign(Node):
    name: str
    expression: "Expression"

    def __str__(self) -> str:
        return f"{self.name} = {self.expression}"


@dataclass(frozen=True, repr=False)
class If(Node):
    condition: "Expression"
    consequence: "Statement"
    alternative: "Statement"

    def __str__(self) -> str:
        return (f"if ({self.condition}) {{ {self.consequence} }} "
                f"else {{ {self.alternative} }}")


@dataclass(frozen=True, repr=False)
class Sequence(Node):
    first: "Statement"
    second: "Statement"

    def __str__(self) -> str:
        return f"{self.first}; {self.second}"


@dataclass(frozen=True, repr=False)
class While(Node):
    condition: "Expression"
    body: "Statement"

    def __str__(self) -> str:
        return f"while ({self.condition}) {{ {self.body} }}"


Statement = Union[DoNothing, Assign, If, Sequence, While]

STATEMENT_TYPES = (DoNothing, Assign, If, Sequence, While)
