"""
Execution traces and trace sinks.

A Trace is the ordered record of every configuration a Machine visited:
one entry before each step, plus the terminal configuration at the end.

A sink is any callable taking the rendered program and rendered
environment of a configuration:

    def sink(program: str, environment: str) -> None: ...

The machine calls its sink once per recorded configuration. Three sinks
are provided: print_sink (writes "program, environment" lines, like the
classic machine output), log_sink (loguru) and collect_sink (appends the
pairs to a list, handy in tests).
"""

import json
import sys
from typing import Callable, Dict, Iterator, List, Optional, TextIO, Tuple

from loguru import logger

from .environment import Environment

TraceSink = Callable[[str, str], None]


class Configuration:
    """A (program, environment) pair recorded during a run."""

    __slots__ = ('index', 'program', 'environment')

    def __init__(self, index: int, program, environment: Environment):
        self.index = index
        self.program = program
        self.environment = environment

    @property
    def rendered_program(self) -> str:
        return str(self.program)

    @property
    def rendered_environment(self) -> str:
        return str(self.environment)

    def __str__(self) -> str:
        return f"{self.program}, {self.environment}"

    def __repr__(self) -> str:
        return f"Configuration({self.index}: {self})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return (self.program, self.environment) == (other.program, other.environment)

    def __hash__(self) -> int:
        return hash((self.program, self.environment))

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary for serialization."""
        return {
            "index": self.index,
            "program": self.rendered_program,
            "environment": self.environment.to_dict(),
        }


class Trace:
    """
    The configurations visited by a run, in order.

    Provides multiple formatting options:
        - format("lines"): one "program, environment" line per configuration
        - format("verbose"): Initial / numbered steps / Final (default repr)
        - format("chain"): program renderings joined by arrows
        - format("compact"): single line summary
        - to_dict() / to_json(): JSON-serializable output
    """

    def __init__(self):
        self.configurations: List[Configuration] = []

    def add(self, configuration: Configuration):
        self.configurations.append(configuration)

    @property
    def initial(self) -> Optional[Configuration]:
        return self.configurations[0] if self.configurations else None

    @property
    def final(self) -> Optional[Configuration]:
        return self.configurations[-1] if self.configurations else None

    @property
    def step_count(self) -> int:
        """Number of reduction steps between the first and last configuration."""
        return max(len(self.configurations) - 1, 0)

    def pairs(self) -> List[Tuple[str, str]]:
        """Rendered (program, environment) pairs, as a sink receives them."""
        return [(c.rendered_program, c.rendered_environment) for c in self.configurations]

    def format(self, style: str = "verbose") -> str:
        """
        Format the trace in different styles.

        Args:
            style: One of "lines", "verbose", "chain", "compact"

        Returns:
            Formatted string representation of the trace.
        """
        if style == "lines":
            return "\n".join(str(c) for c in self.configurations)

        elif style == "chain":
            if not self.configurations:
                return ""
            parts = [self.configurations[0].rendered_program]
            for configuration in self.configurations[1:]:
                parts.append("  -->")
                parts.append(configuration.rendered_program)
            return "\n".join(parts)

        elif style == "compact":
            if not self.configurations:
                return "(empty trace)"
            return (f"{self.initial} --[{self.step_count} steps]--> {self.final}")

        elif style == "verbose":
            return repr(self)

        raise ValueError(f"Unknown trace format: {style}. "
                         f"Use one of: lines, verbose, chain, compact")

    def __repr__(self) -> str:
        if not self.configurations:
            return "Trace(empty)"
        lines = [f"Initial: {self.initial}"]
        for i, configuration in enumerate(self.configurations[1:-1], 1):
            lines.append(f"  {i}. {configuration}")
        lines.append(f"Final: {self.final}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.configurations)

    def __iter__(self) -> Iterator[Configuration]:
        """Iterate over recorded configurations."""
        return iter(self.configurations)

    def __getitem__(self, index: int) -> Configuration:
        return self.configurations[index]

    def __bool__(self) -> bool:
        """True if any reduction step was taken."""
        return self.step_count > 0

    def to_dict(self) -> Dict:
        """Convert trace to dictionary for JSON serialization."""
        return {
            "initial": self.initial.to_dict() if self.initial else None,
            "final": self.final.to_dict() if self.final else None,
            "configurations": [c.to_dict() for c in self.configurations],
            "step_count": self.step_count,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def summary(self) -> str:
        """Get a brief summary of the run."""
        if not self.configurations:
            return "Nothing was run"
        if not self:
            return f"Already terminal: {self.final}"
        return f"{self.step_count} steps, final configuration: {self.final}"


# ============================================================
# Sinks
# ============================================================

def print_sink(stream: Optional[TextIO] = None) -> TraceSink:
    """Sink writing one "program, environment" line per configuration."""

    def sink(program: str, environment: str) -> None:
        print(f"{program}, {environment}", file=stream if stream is not None else sys.stdout)

    return sink


def log_sink(level: str = "DEBUG") -> TraceSink:
    """
    Sink emitting each configuration as a loguru record.

    Records are logged under the smallstep namespace, which the library
    disables on import; call logger.enable("smallstep") (the CLI does) to
    see them.
    """

    def sink(program: str, environment: str) -> None:
        logger.log(level, "trace.configuration program={} environment={}", program, environment)

    return sink


def collect_sink(target: List[Tuple[str, str]]) -> TraceSink:
    """Sink appending (program, environment) pairs to target."""

    def sink(program: str, environment: str) -> None:
        target.append((program, environment))

    return sink
