"""
Built-in example programs.

Each entry builds a fresh (program, environment) pair, so callers can run
the same example repeatedly. The CLI lists and runs these by name.
"""

from typing import Callable, Dict, List, Tuple

from .environment import Environment
from .nodes import (
    Add, Assign, Boolean, DoNothing, GreaterThan, If, LessThan, Multiply,
    Number, Sequence, Variable, While,
)


class Program:
    """A named example program."""

    def __init__(self, name: str, description: str, build: Callable[[], Tuple]):
        self.name = name
        self.description = description
        self._build = build

    def build(self) -> Tuple:
        program, environment = self._build()
        return program, Environment.coerce(environment)

    def __repr__(self) -> str:
        return f"Program({self.name!r})"


def _arithmetic():
    return Add(
        Multiply(Number(1), Number(2)),
        Multiply(Number(3), Number(4)),
    ), {}


def _variables():
    return Add(Variable("x"), Variable("y")), {"x": Number(3), "y": Number(4)}


def _increment():
    return Assign("x", Add(Variable("x"), Number(1))), {"x": Number(2)}


def _triple_loop():
    return While(
        LessThan(Variable("x"), Number(5)),
        Assign("x", Multiply(Variable("x"), Number(3))),
    ), {"x": Number(1)}


def _unbound():
    return Variable("z"), {}


def _branch():
    return If(
        GreaterThan(Variable("x"), Number(2)),
        Assign("y", Boolean(True)),
        DoNothing(),
    ), {"x": Number(3)}


def _sequence():
    return Sequence(
        Assign("x", Add(Number(1), Number(1))),
        Assign("y", Add(Variable("x"), Number(3))),
    ), {}


PROGRAMS: Dict[str, Program] = {
    p.name: p for p in [
        Program("arithmetic", "1 * 2 + 3 * 4 reduced to a number", _arithmetic),
        Program("variables", "x + y with x and y bound", _variables),
        Program("increment", "x = x + 1 starting from x = 2", _increment),
        Program("triple-loop", "while (x < 5) { x = x * 3 } from x = 1", _triple_loop),
        Program("unbound", "a variable with no binding (fails)", _unbound),
        Program("branch", "if (x > 2) { y = true } else { do-nothing }", _branch),
        Program("sequence", "x = 1 + 1; y = x + 3", _sequence),
    ]
}


def get_program(name: str) -> Program:
    """Look up a built-in program, raising KeyError for unknown names."""
    try:
        return PROGRAMS[name]
    except KeyError:
        raise KeyError(f"No program named '{name}'") from None


def program_names() -> List[str]:
    return list(PROGRAMS)
