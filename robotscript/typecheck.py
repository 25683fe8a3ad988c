# Copyright 2025 Ralph Lemke
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Expression type inference.

Types are inferred bottom-up, left operand before right. The first error
found is returned and nothing past it is checked.
"""

from collections.abc import Mapping

from .ast import (
    BinaryExpr,
    BooleanLiteral,
    IntegerLiteral,
    StateQuery,
    StateQueryExpr,
    UnaryExpr,
    ValueType,
    VariableRef,
)
from .results import ExpressionResult

ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/"})
RELATIONAL_OPERATORS = frozenset({">", ">=", "<", "<="})
LOGICAL_OPERATORS = frozenset({"&", "|"})
EQUALITY_OPERATORS = frozenset({"=", "!="})

NEGATE = "-"
NOT = "~"


def infer_type(expr, scope: Mapping[str, str]) -> ExpressionResult:
    """Infer the value type of *expr*.

    Args:
        expr: Expression node
        scope: Visible variable names mapped to their declared types

    Returns:
        ExpressionResult with the inferred type, or the first type error
    """
    if isinstance(expr, IntegerLiteral):
        return ExpressionResult.of(ValueType.NUMERIC)
    if isinstance(expr, BooleanLiteral):
        return ExpressionResult.of(ValueType.BOOLEAN)
    if isinstance(expr, VariableRef):
        declared = scope.get(expr.name)
        if declared is None:
            return ExpressionResult.failure(f"Invalid variable, '{expr.name}' was not declared")
        return ExpressionResult.of(declared)
    if isinstance(expr, StateQueryExpr):
        result_type = StateQuery.result_type(expr.name)
        if result_type is None:
            return ExpressionResult.internal_failure(f"Unknown state query '{expr.name}'")
        return ExpressionResult.of(result_type)
    if isinstance(expr, UnaryExpr):
        return _infer_unary(expr, scope)
    if isinstance(expr, BinaryExpr):
        return _infer_binary(expr, scope)
    return ExpressionResult.internal_failure(
        f"Unknown expression node {type(expr).__name__}"
    )


def _infer_unary(expr: UnaryExpr, scope: Mapping[str, str]) -> ExpressionResult:
    operand = infer_type(expr.operand, scope)
    if not operand.is_valid:
        return operand

    if expr.operator == NEGATE:
        if operand.value_type != ValueType.NUMERIC:
            return ExpressionResult.failure(
                f"Cannot make a {operand.value_type} value negative, misuse of operator '-'"
            )
        return ExpressionResult.of(ValueType.NUMERIC)
    if expr.operator == NOT:
        if operand.value_type != ValueType.BOOLEAN:
            return ExpressionResult.failure(
                f"Cannot negate a {operand.value_type} value, misuse of operator '~'"
            )
        return ExpressionResult.of(ValueType.BOOLEAN)
    return ExpressionResult.internal_failure(f"Unknown unary operator '{expr.operator}'")


def _infer_binary(expr: BinaryExpr, scope: Mapping[str, str]) -> ExpressionResult:
    left = infer_type(expr.left, scope)
    if not left.is_valid:
        return left
    right = infer_type(expr.right, scope)
    if not right.is_valid:
        return right

    op = expr.operator
    if op in ARITHMETIC_OPERATORS or op in RELATIONAL_OPERATORS:
        operand_error = _require_operands(op, left, right, ValueType.NUMERIC)
        if operand_error:
            return operand_error
        if op in ARITHMETIC_OPERATORS:
            return ExpressionResult.of(ValueType.NUMERIC)
        return ExpressionResult.of(ValueType.BOOLEAN)

    if op in LOGICAL_OPERATORS:
        operand_error = _require_operands(op, left, right, ValueType.BOOLEAN)
        if operand_error:
            return operand_error
        return ExpressionResult.of(ValueType.BOOLEAN)

    if op in EQUALITY_OPERATORS:
        if left.value_type != right.value_type:
            return ExpressionResult.failure(
                f"To use operator {op} the left operand must be of the same type as the right operand"
            )
        return ExpressionResult.of(ValueType.BOOLEAN)

    return ExpressionResult.internal_failure(f"Unknown binary operator '{op}'")


def _require_operands(
    op: str, left: ExpressionResult, right: ExpressionResult, expected: str
) -> ExpressionResult | None:
    """Return an error if either operand is not of the *expected* type."""
    if left.value_type != expected:
        return ExpressionResult.failure(
            f"To use operator {op} the left operand must be of type {expected}"
        )
    if right.value_type != expected:
        return ExpressionResult.failure(
            f"To use operator {op} the right operand must be of type {expected}"
        )
    return None
