"""Tests for trace formatting."""

import json

import pytest
from smallstep import (
    Add, Assign, Configuration, DoNothing, Environment, Machine, Number,
    Trace, Variable,
)


class TestTraceFormatting:
    """Tests for trace format() method."""

    def setup_method(self):
        """Run x = x + 1 from x = 2."""
        self.trace = Machine(
            Assign("x", Add(Variable("x"), Number(1))), {"x": Number(2)}
        ).run()

    def test_format_lines(self):
        """Lines format prints one configuration per line."""
        assert self.trace.format("lines") == (
            "x = x + 1, {x: 2}\n"
            "x = 2 + 1, {x: 2}\n"
            "x = 3, {x: 2}\n"
            "do-nothing, {x: 3}"
        )

    def test_format_verbose(self):
        """Verbose format shows initial, numbered steps and final."""
        verbose = self.trace.format("verbose")
        assert verbose.splitlines() == [
            "Initial: x = x + 1, {x: 2}",
            "  1. x = 2 + 1, {x: 2}",
            "  2. x = 3, {x: 2}",
            "Final: do-nothing, {x: 3}",
        ]
        assert verbose == repr(self.trace)

    def test_format_chain(self):
        """Chain format shows program rewrites only."""
        chain = self.trace.format("chain")
        assert chain.splitlines() == [
            "x = x + 1", "  -->", "x = 2 + 1", "  -->", "x = 3", "  -->", "do-nothing",
        ]

    def test_format_compact(self):
        """Compact format is a single line."""
        compact = self.trace.format("compact")
        assert compact == "x = x + 1, {x: 2} --[3 steps]--> do-nothing, {x: 3}"
        assert compact.count("\n") == 0

    def test_unknown_format(self):
        """Unknown formats raise ValueError."""
        with pytest.raises(ValueError):
            self.trace.format("fancy")

    def test_summary(self):
        """summary reports step count and final configuration."""
        assert self.trace.summary() == "3 steps, final configuration: do-nothing, {x: 3}"


class TestTraceSerialization:
    """Tests for to_dict() and to_json()."""

    def test_to_dict(self):
        """to_dict holds initial, final and every configuration."""
        trace = Machine(Assign("x", Number(1))).run()
        data = trace.to_dict()
        assert data["step_count"] == 1
        assert data["initial"] == {"index": 0, "program": "x = 1", "environment": {}}
        assert data["final"] == {"index": 1, "program": "do-nothing",
                                 "environment": {"x": "1"}}
        assert len(data["configurations"]) == 2

    def test_to_json_round_trips_through_json(self):
        """to_json output parses as JSON."""
        trace = Machine(Add(Number(2), Number(3))).run()
        data = json.loads(trace.to_json())
        assert data["final"]["program"] == "5"


class TestTraceContainer:
    """Tests for iteration, indexing and truthiness."""

    def test_empty_trace(self):
        """An empty trace is falsy and formats safely."""
        trace = Trace()
        assert len(trace) == 0
        assert not trace
        assert trace.initial is None
        assert trace.final is None
        assert trace.step_count == 0
        assert repr(trace) == "Trace(empty)"
        assert trace.format("compact") == "(empty trace)"
        assert trace.summary() == "Nothing was run"

    def test_iteration_and_indexing(self):
        """Traces iterate and index configurations."""
        trace = Machine(Assign("x", Number(1))).run()
        configurations = list(trace)
        assert all(isinstance(c, Configuration) for c in configurations)
        assert trace[0] is configurations[0]
        assert trace[-1].program == DoNothing()

    def test_terminal_only_trace_summary(self):
        """A terminal-only run reports it was already terminal."""
        trace = Machine(Number(3)).run()
        assert not trace
        assert trace.summary() == "Already terminal: 3, {}"


class TestConfiguration:
    """Tests for Configuration values."""

    def test_rendering(self):
        """Configurations render program and environment."""
        configuration = Configuration(0, Assign("x", Number(1)), Environment(y=Number(2)))
        assert configuration.rendered_program == "x = 1"
        assert configuration.rendered_environment == "{y: 2}"
        assert str(configuration) == "x = 1, {y: 2}"

    def test_equality_ignores_index(self):
        """Configuration equality ignores the index."""
        a = Configuration(0, DoNothing(), Environment())
        b = Configuration(5, DoNothing(), Environment())
        assert a == b
        assert hash(a) == hash(b)
