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

"""Statement and body validation.

Statements are checked in order against one flat scope: blocks and
control-flow bodies share the scope of the enclosing declaration.
"""

from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass

from .ast import (
    AssignStmt,
    BlockStmt,
    CallStmt,
    ChangePositionStmt,
    CornerMode,
    CornerStmt,
    ForStmt,
    IfStmt,
    InformStmt,
    MessageMode,
    MessageStmt,
    Parameter,
    Procedure,
    StringLiteral,
    ValueType,
    VariableRef,
    WhileStmt,
)
from .results import ErrorCategory, ValidationResult
from .typecheck import infer_type

BROADCAST_TARGET = "*"


@dataclass(frozen=True)
class ProcedureSignature:
    """Name and formal parameters of a declared procedure."""

    name: str
    params: tuple[Parameter, ...]


def signature_table(procedures: Iterable[Procedure]) -> dict[str, ProcedureSignature]:
    """Build the call table. The first declaration of a name wins."""
    table: dict[str, ProcedureSignature] = {}
    for procedure in procedures:
        table.setdefault(procedure.name, ProcedureSignature(procedure.name, procedure.params))
    return table


def validate_body(
    body: Sequence,
    scope: Mapping[str, str],
    instance_names: Collection[str],
    procedures: Mapping[str, ProcedureSignature],
    broadcast_target: str = BROADCAST_TARGET,
) -> ValidationResult:
    """Validate statements in order, stopping at the first error."""
    for stmt in body:
        result = validate_statement(stmt, scope, instance_names, procedures, broadcast_target)
        if result.has_error:
            return result
    return ValidationResult.success()


def validate_statement(
    stmt,
    scope: Mapping[str, str],
    instance_names: Collection[str],
    procedures: Mapping[str, ProcedureSignature],
    broadcast_target: str = BROADCAST_TARGET,
) -> ValidationResult:
    """Validate a single statement.

    Args:
        stmt: Statement node
        scope: Visible variable names mapped to their declared types
        instance_names: Names of declared robot instances (message targets)
        procedures: Declared procedures by name
        broadcast_target: Message target that addresses every instance

    Returns:
        ValidationResult with the first error found, if any
    """
    if isinstance(stmt, AssignStmt):
        return _validate_assign(stmt, scope)
    if isinstance(stmt, BlockStmt):
        return validate_body(stmt.body, scope, instance_names, procedures, broadcast_target)
    if isinstance(stmt, (IfStmt, WhileStmt, ForStmt)):
        return _validate_control(stmt, scope, instance_names, procedures, broadcast_target)
    if isinstance(stmt, InformStmt):
        return _validate_inform(stmt, scope)
    if isinstance(stmt, ChangePositionStmt):
        return _validate_coordinates(stmt.x, stmt.y, "Pos", scope)
    if isinstance(stmt, MessageStmt):
        return _validate_message(stmt, scope, instance_names, broadcast_target)
    if isinstance(stmt, CornerStmt):
        return _validate_coordinates(stmt.x, stmt.y, CornerMode.keyword(stmt.mode), scope)
    if isinstance(stmt, CallStmt):
        return _validate_call(stmt, scope, procedures)
    return ValidationResult.internal_failure(f"Unknown statement node {type(stmt).__name__}")


def _validate_assign(stmt: AssignStmt, scope: Mapping[str, str]) -> ValidationResult:
    declared = scope.get(stmt.target)
    if declared is None:
        return ValidationResult.failure(
            ErrorCategory.INVALID_ASSIGNMENT,
            f"Invalid variable, '{stmt.target}' was not declared",
        )

    where = f", in the assignment of variable '{stmt.target}'"
    value = infer_type(stmt.value, scope)
    if not value.is_valid:
        return value.as_validation(ErrorCategory.INVALID_ASSIGNMENT, where)

    if value.value_type != declared:
        return ValidationResult.failure(
            ErrorCategory.INVALID_ASSIGNMENT,
            f"Cannot assign a value of type {value.value_type} to a variable of type "
            f"{declared}{where}",
        )
    return ValidationResult.success()


def _validate_control(
    stmt: IfStmt | WhileStmt | ForStmt,
    scope: Mapping[str, str],
    instance_names: Collection[str],
    procedures: Mapping[str, ProcedureSignature],
    broadcast_target: str,
) -> ValidationResult:
    condition = infer_type(stmt.condition, scope)
    if not condition.is_valid:
        return condition.as_validation(
            ErrorCategory.INVALID_CONDITION, ", in the condition declaration"
        )

    if isinstance(stmt, ForStmt):
        keyword, expected = "repetir", ValueType.NUMERIC
    elif isinstance(stmt, WhileStmt):
        keyword, expected = "mientras", ValueType.BOOLEAN
    else:
        keyword, expected = "si", ValueType.BOOLEAN

    if condition.value_type != expected:
        return ValidationResult.failure(
            ErrorCategory.INVALID_CONDITION_RESULT,
            f"Invalid expression result, the condition of a {keyword} statement must "
            f"evaluate to {expected}",
        )

    result = validate_statement(stmt.body, scope, instance_names, procedures, broadcast_target)
    if result.has_error:
        return result

    if isinstance(stmt, IfStmt) and stmt.else_body is not None:
        result = validate_statement(
            stmt.else_body, scope, instance_names, procedures, broadcast_target
        )
        return result.with_context(", in the sino branch")

    return ValidationResult.success()


def _validate_inform(stmt: InformStmt, scope: Mapping[str, str]) -> ValidationResult:
    if isinstance(stmt.message, StringLiteral):
        argument = stmt.value
    else:
        argument = stmt.message
    if argument is None:
        return ValidationResult.success()

    return infer_type(argument, scope).as_validation(
        ErrorCategory.INVALID_ARGUMENT, ", in the argument of Informar"
    )


def _validate_coordinates(x, y, keyword: str, scope: Mapping[str, str]) -> ValidationResult:
    for axis, expr in (("x", x), ("y", y)):
        coordinate = infer_type(expr, scope)
        if not coordinate.is_valid:
            return coordinate.as_validation(
                ErrorCategory.INVALID_ARGUMENT, f", in the {axis} coordinate of {keyword}"
            )
        if coordinate.value_type != ValueType.NUMERIC:
            return ValidationResult.failure(
                ErrorCategory.INVALID_ARGUMENT,
                f"Invalid expression result, the {axis} argument of {keyword} must evaluate "
                f"to {ValueType.NUMERIC}",
            )
    return ValidationResult.success()


def _validate_message(
    stmt: MessageStmt,
    scope: Mapping[str, str],
    instance_names: Collection[str],
    broadcast_target: str,
) -> ValidationResult:
    keyword = MessageMode.keyword(stmt.mode)
    value = infer_type(stmt.value, scope)
    if not value.is_valid:
        return value.as_validation(
            ErrorCategory.INVALID_ARGUMENT, f", in the value argument of {keyword}"
        )

    if stmt.target != broadcast_target and stmt.target not in instance_names:
        return ValidationResult.failure(
            ErrorCategory.INVALID_ARGUMENT,
            f"Instance '{stmt.target}' was not declared and is used as the target of {keyword}",
        )
    return ValidationResult.success()


def _validate_call(
    stmt: CallStmt,
    scope: Mapping[str, str],
    procedures: Mapping[str, ProcedureSignature],
) -> ValidationResult:
    signature = procedures.get(stmt.name)
    if signature is None:
        return ValidationResult.failure(
            ErrorCategory.INVALID_CALL, f"Procedure '{stmt.name}' was not declared"
        )

    expected, given = len(signature.params), len(stmt.args)
    if given < expected:
        return ValidationResult.failure(
            ErrorCategory.INVALID_CALL,
            f"Too few arguments in the call to procedure '{stmt.name}': "
            f"expected {expected}, got {given}",
        )
    if given > expected:
        return ValidationResult.failure(
            ErrorCategory.INVALID_CALL,
            f"Too many arguments in the call to procedure '{stmt.name}': "
            f"expected {expected}, got {given}",
        )

    for position, (param, arg) in enumerate(zip(signature.params, stmt.args), start=1):
        mismatch = (
            f"Argument {position} in the call to procedure '{stmt.name}' does not have the "
            f"type of parameter {position} ({param.type}) in the procedure declaration"
        )

        if param.by_reference:
            if not isinstance(arg, VariableRef):
                return ValidationResult.failure(
                    ErrorCategory.INVALID_CALL,
                    f"Argument {position} in the call to procedure '{stmt.name}' must be a "
                    f"variable because parameter '{param.name}' is passed by reference",
                )
            declared = scope.get(arg.name)
            if declared is None:
                return ValidationResult.failure(
                    ErrorCategory.INVALID_CALL,
                    f"Variable '{arg.name}' was not declared and is used in the call to "
                    f"procedure '{stmt.name}'",
                )
            if declared != param.type:
                return ValidationResult.failure(ErrorCategory.INVALID_CALL, mismatch)
            continue

        value = infer_type(arg, scope)
        if not value.is_valid:
            return value.as_validation(
                ErrorCategory.INVALID_CALL,
                f", in argument {position} of the call to procedure '{stmt.name}'",
            )
        if value.value_type != param.type:
            return ValidationResult.failure(ErrorCategory.INVALID_CALL, mismatch)

    return ValidationResult.success()
