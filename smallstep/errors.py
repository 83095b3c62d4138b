"""
Error types raised while reducing SIMPLE programs.

Every failure a reduction step can report derives from ReductionError,
so callers driving a Machine can catch the whole family at once. None of
these are recovered from: a malformed tree aborts the run.
"""


class ReductionError(Exception):
    """Base class for reduction failures."""


class UnboundVariable(ReductionError):
    """A Variable was reduced in an environment that does not bind it."""

    def __init__(self, name: str, environment=None):
        self.name = name
        self.environment = environment
        super().__init__(f"Unbound variable '{name}'")


class NonReducibleInvariantViolation(ReductionError):
    """reduce() was called on a node that reports itself as not reducible."""

    def __init__(self, node):
        self.node = node
        super().__init__(f"{node!r} is not reducible")


class NonBooleanCondition(ReductionError):
    """An if/while condition reduced to a terminal value that is not a Boolean."""

    def __init__(self, condition):
        self.condition = condition
        super().__init__(f"Condition reduced to non-boolean value {condition!r}")


class OperandTypeMismatch(ReductionError):
    """A binary operator was applied to terminal operands of the wrong kind."""

    def __init__(self, node, left, right):
        self.node = node
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot apply {type(node).__name__} to {left!r} and {right!r}"
        )


class StepLimitExceeded(ReductionError):
    """A Machine hit its caller-imposed step bound before reaching a terminal."""

    def __init__(self, limit: int, trace=None):
        self.limit = limit
        self.trace = trace
        super().__init__(f"Program still reducible after {limit} steps")
