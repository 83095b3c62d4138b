"""
SMALLSTEP - Small-step operational semantics for the SIMPLE language

A reference interpreter that reduces expression and statement trees one
step at a time against an immutable environment, recording every
intermediate configuration.

Quick Start:
    from smallstep import Machine, While, LessThan, Assign, Multiply, Variable, Number

    machine = Machine(
        While(
            LessThan(Variable("x"), Number(5)),
            Assign("x", Multiply(Variable("x"), Number(3))),
        ),
        {"x": Number(1)},
    )
    trace = machine.run()
    trace.final.environment        # => {x: 9}
    print(trace.format("lines"))

Single steps:
    reduce(Add(Number(1), Number(2)), {})          # => «3»
    reduce(Assign("x", Number(1)), {})             # => («do-nothing», {x: 1})

Nodes:
    Expressions  Variable, Number, Boolean, Add, Multiply, LessThan, GreaterThan
    Statements   DoNothing, Assign, If, Sequence, While

There is no textual syntax: trees are built with the node constructors.
"""

from loguru import logger

__version__ = "0.1.0"

# Node types
from .nodes import (
    Node,
    Variable,
    Number,
    Boolean,
    BinaryExpression,
    Add,
    Multiply,
    LessThan,
    GreaterThan,
    DoNothing,
    Assign,
    If,
    Sequence,
    While,
    Expression,
    Statement,
    TerminalValue,
    is_terminal,
)

from .environment import Environment

# Reduction rules
from .semantics import (
    reducible,
    reduce,
    reduce_expression,
    reduce_statement,
    evaluate,
)

# Machine and tracing
from .machine import Machine
from .trace import (
    Configuration,
    Trace,
    TraceSink,
    print_sink,
    log_sink,
    collect_sink,
)

from .errors import (
    ReductionError,
    UnboundVariable,
    NonReducibleInvariantViolation,
    NonBooleanCondition,
    OperandTypeMismatch,
    StepLimitExceeded,
)

from .programs import PROGRAMS, Program, get_program

logger.disable("smallstep")

# Public API
__all__ = [
    # Version
    "__version__",
    # Nodes
    "Node",
    "Variable",
    "Number",
    "Boolean",
    "BinaryExpression",
    "Add",
    "Multiply",
    "LessThan",
    "GreaterThan",
    "DoNothing",
    "Assign",
    "If",
    "Sequence",
    "While",
    "Expression",
    "Statement",
    "TerminalValue",
    "is_terminal",
    # Environment
    "Environment",
    # Reduction
    "reducible",
    "reduce",
    "reduce_expression",
    "reduce_statement",
    "evaluate",
    # Machine
    "Machine",
    "Configuration",
    "Trace",
    "TraceSink",
    "print_sink",
    "log_sink",
    "collect_sink",
    # Errors
    "ReductionError",
    "UnboundVariable",
    "NonReducibleInvariantViolation",
    "NonBooleanCondition",
    "OperandTypeMismatch",
    "StepLimitExceeded",
    # Programs
    "PROGRAMS",
    "Program",
    "get_program",
]
