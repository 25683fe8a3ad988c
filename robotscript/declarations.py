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

"""Procedure and robot type declaration checks."""

from collections.abc import Collection, Iterable, Sequence

from .ast import Parameter, Procedure, RobotType, Variable
from .bindings import find_duplicate
from .results import ErrorCategory, ValidationResult
from .statements import BROADCAST_TARGET, signature_table, validate_body


def build_scope(
    variables: Iterable[Variable], params: Iterable[Parameter] = ()
) -> dict[str, str]:
    """Map visible names to declared types.

    Locals come first and the first occurrence of a name wins, so a local
    hides a parameter with the same name.
    """
    scope: dict[str, str] = {}
    for declared in (*variables, *params):
        scope.setdefault(declared.name, declared.type)
    return scope


def validate_procedures(
    procedures: Sequence[Procedure],
    instance_names: Collection[str],
    broadcast_target: str = BROADCAST_TARGET,
    reject_shadowed_parameters: bool = False,
) -> ValidationResult:
    """Validate procedure declarations and their bodies.

    Args:
        procedures: Procedure declarations in source order
        instance_names: Names of declared robot instances
        broadcast_target: Message target that addresses every instance
        reject_shadowed_parameters: Also reject locals named like a parameter

    Returns:
        ValidationResult with the first error found, if any
    """
    duplicate = find_duplicate(procedure.name for procedure in procedures)
    if duplicate:
        name, first, second = duplicate
        return ValidationResult.failure(
            ErrorCategory.INVALID_PROCEDURE,
            f"Identifier '{name}' is used in the declaration of procedure {first} and {second}",
        )

    signatures = signature_table(procedures)

    for procedure in procedures:
        where = f", in the declaration of procedure '{procedure.name}'"

        duplicate = find_duplicate(param.name for param in procedure.params)
        if duplicate:
            name, first, second = duplicate
            return ValidationResult.failure(
                ErrorCategory.INVALID_PARAMETER,
                f"Identifier '{name}' is used in parameter {first} and {second}{where}",
            )

        duplicate = find_duplicate(variable.name for variable in procedure.variables)
        if duplicate:
            name, first, second = duplicate
            return ValidationResult.failure(
                ErrorCategory.INVALID_VARIABLE,
                f"Identifier '{name}' is used in variable {first} and {second}{where}",
            )

        if reject_shadowed_parameters:
            param_names = {param.name for param in procedure.params}
            for variable in procedure.variables:
                if variable.name in param_names:
                    return ValidationResult.failure(
                        ErrorCategory.INVALID_VARIABLE,
                        f"Variable '{variable.name}' has the same name as a parameter{where}",
                    )

        scope = build_scope(procedure.variables, procedure.params)
        result = validate_body(procedure.body, scope, instance_names, signatures, broadcast_target)
        if result.has_error:
            return result.with_context(where)

    return ValidationResult.success()


def validate_robot_types(
    robot_types: Sequence[RobotType],
    procedures: Sequence[Procedure],
    instance_names: Collection[str],
    broadcast_target: str = BROADCAST_TARGET,
) -> ValidationResult:
    """Validate robot type declarations and their bodies."""
    duplicate = find_duplicate(robot_type.name for robot_type in robot_types)
    if duplicate:
        name, first, second = duplicate
        return ValidationResult.failure(
            ErrorCategory.INVALID_ROBOT_TYPE,
            f"Identifier '{name}' is used in the declaration of robot type {first} and {second}",
        )

    signatures = signature_table(procedures)

    for robot_type in robot_types:
        where = f", in the declaration of robot type '{robot_type.name}'"

        duplicate = find_duplicate(variable.name for variable in robot_type.variables)
        if duplicate:
            name, first, second = duplicate
            return ValidationResult.failure(
                ErrorCategory.INVALID_VARIABLE,
                f"Identifier '{name}' is used in variable {first} and {second}{where}",
            )

        scope = build_scope(robot_type.variables)
        result = validate_body(robot_type.body, scope, instance_names, signatures, broadcast_target)
        if result.has_error:
            return result.with_context(where)

    return ValidationResult.success()
