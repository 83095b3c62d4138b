"""
Small-step reduction rules for SIMPLE.

Each call performs exactly one reduction step and returns new nodes; the
input tree and environment are left as they were.

    reducible(node)                 -> bool
    reduce_expression(expr, env)    -> Expression
    reduce_statement(stmt, env)     -> (Statement, Environment)
    reduce(node, env)               -> whichever of the two fits the node

Binary expressions reduce their left operand first, then their right, and
combine once both are terminal. Statements follow the usual rules:

    x = e               reduce e, then bind x and become do-nothing
    if (c) {a} else {b} reduce c, then pick a or b
    a; b                reduce a; once a is do-nothing, become b
    while (c) {b}       become: if (c) { b; while (c) {b} } else { do-nothing }

Descending into nested operands and nested sequence heads walks an explicit
path instead of recursing, so very deep trees stay within the interpreter's
stack limit.
"""

import operator
from dataclasses import replace
from typing import Callable, Dict, List, Tuple, Union

from .environment import Environment
from .errors import NonBooleanCondition, NonReducibleInvariantViolation, OperandTypeMismatch
from .nodes import (
    Add, Assign, BinaryExpression, Boolean, DoNothing, Expression, GreaterThan,
    If, LessThan, Multiply, Number, Sequence, Statement, While, Variable,
    EXPRESSION_TYPES, STATEMENT_TYPES,
)

StepResult = Tuple[Statement, Environment]

# operator, operand type, result type
_OPERATORS: Dict[type, Tuple[Callable, type, type]] = {
    Add: (operator.add, Number, Number),
    Multiply: (operator.mul, Number, Number),
    LessThan: (operator.lt, Number, Boolean),
    GreaterThan: (operator.gt, Number, Boolean),
}


def reducible(node) -> bool:
    """
    Report whether node has another reduction step available.

    Number, Boolean and DoNothing are the only non-reducible nodes.
    Every other variant is reducible, including binary expressions whose
    operands are both terminal (their next step combines them).
    """
    if isinstance(node, (Number, Boolean, DoNothing)):
        return False
    if isinstance(node, (Variable, BinaryExpression, Assign, If, Sequence, While)):
        return True
    raise TypeError(f"Not a SIMPLE node: {node!r}")


# ============================================================
# Expressions
# ============================================================

def reduce_expression(expression: Expression, environment: Environment) -> Expression:
    """
    Reduce an expression by one step.

    Raises:
        NonReducibleInvariantViolation: expression is already terminal
        UnboundVariable: the step looks up a name the environment lacks
        OperandTypeMismatch: an operator meets operands of the wrong kind
    """
    if not isinstance(expression, EXPRESSION_TYPES):
        raise TypeError(f"Not a SIMPLE expression: {expression!r}")
    if not reducible(expression):
        raise NonReducibleInvariantViolation(expression)

    environment = Environment.coerce(environment)

    # Find the leftmost node whose turn it is, remembering how we got there.
    path: List[Tuple[BinaryExpression, str]] = []
    node = expression
    while isinstance(node, BinaryExpression):
        if reducible(node.left):
            path.append((node, 'left'))
            node = node.left
        elif reducible(node.right):
            path.append((node, 'right'))
            node = node.right
        else:
            break

    reduced = _contract_expression(node, environment)

    for parent, side in reversed(path):
        reduced = replace(parent, **{side: reduced})
    return reduced


def _contract_expression(node: Expression, environment: Environment) -> Expression:
    """Apply the rule for a node whose children (if any) are all terminal."""
    if isinstance(node, Variable):
        return environment.lookup(node.name)

    rule = _OPERATORS.get(type(node))
    if rule is None:
        raise TypeError(f"Not a SIMPLE expression: {node!r}")
    op, operand_type, result_type = rule
    left, right = node.left, node.right
    if not (isinstance(left, operand_type) and isinstance(right, operand_type)):
        raise OperandTypeMismatch(node, left, right)
    return result_type(op(left.value, right.value))


def evaluate(expression: Expression, environment=None) -> Expression:
    """
    Reduce an expression until it is terminal and return the value.

    Example:
        evaluate(Add(Number(1), Number(2)))  # => «3»
    """
    environment = Environment.coerce(environment)
    while reducible(expression):
        expression = reduce_expression(expression, environment)
    return expression


# ============================================================
# Statements
# ============================================================

def reduce_statement(statement: Statement, environment: Environment) -> StepResult:
    """
    Reduce a statement by one step.

    Returns a new (statement, environment) pair. The environment only
    changes when an assignment completes.

    Raises:
        NonReducibleInvariantViolation: statement is DoNothing
        NonBooleanCondition: an if condition reduced to a non-Boolean value
        plus anything reduce_expression raises for embedded expressions
    """
    if not isinstance(statement, STATEMENT_TYPES):
        raise TypeError(f"Not a SIMPLE statement: {statement!r}")
    if not reducible(statement):
        raise NonReducibleInvariantViolation(statement)

    environment = Environment.coerce(environment)

    # Walk down the heads of nested sequences to the statement that steps.
    path: List[Sequence] = []
    node = statement
    while isinstance(node, Sequence) and node.first != DoNothing():
        path.append(node)
        node = node.first

    reduced, environment = _contract_statement(node, environment)

    for parent in reversed(path):
        reduced = Sequence(reduced, parent.second)
    return reduced, environment


def _contract_statement(statement: Statement, environment: Environment) -> StepResult:
    if isinstance(statement, Assign):
        if reducible(statement.expression):
            return (Assign(statement.name, reduce_expression(statement.expression, environment)),
                    environment)
        return DoNothing(), environment.bind(statement.name, statement.expression)

    if isinstance(statement, If):
        condition = statement.condition
        if reducible(condition):
            return (If(reduce_expression(condition, environment),
                       statement.consequence, statement.alternative),
                    environment)
        if not isinstance(condition, Boolean):
            raise NonBooleanCondition(condition)
        if condition.value:
            return statement.consequence, environment
        return statement.alternative, environment

    if isinstance(statement, Sequence):
        # Only reached with a do-nothing head.
        return statement.second, environment

    if isinstance(statement, While):
        loop = While(statement.condition, statement.body)
        return If(statement.condition, Sequence(statement.body, loop), DoNothing()), environment

    raise TypeError(f"Not a SIMPLE statement: {statement!r}")


def reduce(node: Union[Expression, Statement], environment) -> Union[Expression, StepResult]:
    """
    Reduce any SIMPLE node by one step.

    Expressions yield the reduced expression; statements yield a
    (statement, environment) pair.
    """
    if isinstance(node, STATEMENT_TYPES):
        return reduce_statement(node, environment)
    return reduce_expression(node, environment)


def is_statement(node) -> bool:
    return isinstance(node, STATEMENT_TYPES)
