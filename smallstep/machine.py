"""
The reduction machine.

A Machine owns the current configuration, a program (statement or
expression) and an environment, and drives it to a fixed point one
small step at a time:

    machine = Machine(
        Assign("x", Add(Variable("x"), Number(1))),
        {"x": Number(2)},
    )
    trace = machine.run()
    print(trace.format("lines"))
    # x = x + 1, {x: 2}
    # x = 2 + 1, {x: 2}
    # x = 3, {x: 2}
    # do-nothing, {x: 3}

The machine never reduces expressions itself; statements reduce their own
sub-expressions. A while loop whose condition never becomes false keeps the
machine running forever. Pass max_steps to bound a run.
"""

from typing import Iterator, Optional

from loguru import logger

from .environment import Environment
from .errors import NonReducibleInvariantViolation, StepLimitExceeded
from .semantics import is_statement, reduce_expression, reduce_statement, reducible
from .trace import Configuration, Trace, TraceSink


class Machine:
    """
    Drives a SIMPLE program to a terminal configuration.

    Args:
        program: a Statement, or an Expression for an expression-only machine
        environment: an Environment, a plain dict of terminal values, or None
        sink: optional callable receiving (program, environment) renderings
            for each recorded configuration
        max_steps: optional bound on the number of steps each run() call may take
    """

    def __init__(self, program, environment=None,
                 sink: Optional[TraceSink] = None,
                 max_steps: Optional[int] = None):
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")
        # Validates the node type up front.
        reducible(program)
        self.program = program
        self.environment = Environment.coerce(environment)
        self.sink = sink
        self.max_steps = max_steps
        self.steps_taken = 0

    @property
    def reducible(self) -> bool:
        return reducible(self.program)

    @property
    def configuration(self) -> Configuration:
        return Configuration(self.steps_taken, self.program, self.environment)

    def step(self) -> Configuration:
        """
        Take one reduction step and return the new configuration.

        Both halves of the configuration are replaced together; if the
        step raises, the machine keeps its previous configuration.
        """
        if not reducible(self.program):
            raise NonReducibleInvariantViolation(self.program)

        if is_statement(self.program):
            program, environment = reduce_statement(self.program, self.environment)
        else:
            program, environment = reduce_expression(self.program, self.environment), self.environment

        self.program, self.environment = program, environment
        self.steps_taken += 1
        return self.configuration

    def steps(self) -> Iterator[Configuration]:
        """
        Yield every configuration the run visits, the terminal one included.

        Each configuration is yielded before the step that leaves it, so a
        caller that stops iterating early leaves the machine at the last
        configuration it saw. max_steps is not applied here.
        """
        while reducible(self.program):
            yield self.configuration
            self.step()
        yield self.configuration

    def run(self) -> Trace:
        """
        Reduce until no further step is possible.

        Records the configuration before every step and the terminal
        configuration once at the end, passing each to the sink.

        Returns:
            The Trace of the run.

        Raises:
            StepLimitExceeded: max_steps was reached while still reducible
            ReductionError: any failure raised by a reduction step
        """
        trace = Trace()
        started_at = self.steps_taken
        logger.debug("machine.run.started program={} environment={}",
                     self.program, self.environment)

        while reducible(self.program):
            if self.max_steps is not None and self.steps_taken - started_at >= self.max_steps:
                self._record(trace)
                logger.warning("machine.run.step_limit limit={} program={}",
                               self.max_steps, self.program)
                raise StepLimitExceeded(self.max_steps, trace)
            self._record(trace)
            try:
                self.step()
            except Exception as e:
                logger.debug("machine.run.failed steps={} error={}", self.steps_taken, e)
                raise

        self._record(trace)
        logger.debug("machine.run.finished steps={} final={}",
                     trace.step_count, trace.final)
        return trace

    def _record(self, trace: Trace) -> None:
        configuration = self.configuration
        trace.add(configuration)
        if self.sink is not None:
            self.sink(configuration.rendered_program, configuration.rendered_environment)

    def __repr__(self) -> str:
        return f"Machine({self.program!r}, {self.environment})"
