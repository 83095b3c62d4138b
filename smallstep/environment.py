"""
Variable environments.

An Environment maps variable names to terminal values (Number or
Boolean). It is never changed in place: bind() returns a new environment
and leaves the receiver untouched, so every configuration in a trace keeps
the environment it was recorded with.
"""

from collections.abc import Mapping
from typing import Dict, Iterator, Optional

from .errors import UnboundVariable
from .nodes import TerminalValue, is_terminal


class Environment(Mapping):
    """
    Immutable mapping from variable name to terminal value.

    Environments compare equal to any mapping with the same bindings, which
    keeps assertions short:

        env = Environment(x=Number(2))
        env.bind("x", Number(3)) == {"x": Number(3)}   # => True
        env["x"]                                       # => Number(2)
        str(env)                                       # => "{x: 2}"

    Examples:
        Environment()                          # empty
        Environment({"x": Number(1)})
        Environment({"x": Number(1)}, y=Boolean(True))
    """

    __slots__ = ('_bindings',)

    def __init__(self, bindings: Optional[Mapping] = None, **kwargs):
        merged = dict(bindings) if bindings is not None else {}
        merged.update(kwargs)
        for name, value in merged.items():
            _check_binding(name, value)
        self._bindings: Dict[str, TerminalValue] = merged

    @classmethod
    def coerce(cls, environment) -> 'Environment':
        """Accept an Environment, a plain mapping, or None."""
        if isinstance(environment, Environment):
            return environment
        return cls(environment)

    def __getitem__(self, name: str) -> TerminalValue:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __hash__(self) -> int:
        return hash(frozenset(self._bindings.items()))

    def lookup(self, name: str) -> TerminalValue:
        """Return the value bound to name, or raise UnboundVariable."""
        try:
            return self._bindings[name]
        except KeyError:
            raise UnboundVariable(name, self) from None

    def bind(self, name: str, value: TerminalValue) -> 'Environment':
        """Return a new environment with name bound to value (insert or overwrite)."""
        _check_binding(name, value)
        updated = dict(self._bindings)
        updated[name] = value
        return Environment(updated)

    def to_dict(self) -> Dict[str, str]:
        """Bindings with rendered values, for JSON output."""
        return {name: str(value) for name, value in self._bindings.items()}

    def __str__(self) -> str:
        if not self._bindings:
            return "{}"
        pairs = ", ".join(f"{name}: {value}" for name, value in self._bindings.items())
        return "{" + pairs + "}"

    def __repr__(self) -> str:
        return f"Environment({self._bindings!r})"


def _check_binding(name, value) -> None:
    if not isinstance(name, str):
        raise TypeError(f"Variable names must be strings, got {name!r}")
    if not is_terminal(value):
        raise TypeError(
            f"Environment values must be Number or Boolean, got {value!r} for '{name}'"
        )
