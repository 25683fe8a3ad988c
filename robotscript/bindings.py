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

"""Instance declaration checks."""

from collections.abc import Iterable, Sequence

from .ast import Instance, RobotType
from .results import ErrorCategory, ValidationResult


def find_duplicate(names: Iterable[str]) -> tuple[str, int, int] | None:
    """Find the first name that repeats an earlier one.

    Returns:
        ``(name, first, second)`` with 1-based positions, or None if all
        names are distinct
    """
    seen: dict[str, int] = {}
    for position, name in enumerate(names, start=1):
        if name in seen:
            return name, seen[name], position
        seen[name] = position
    return None


def validate_instances(
    instances: Sequence[Instance], robot_types: Sequence[RobotType]
) -> ValidationResult:
    """Check instance names are unique and bound to declared robot types."""
    duplicate = find_duplicate(instance.name for instance in instances)
    if duplicate:
        name, first, second = duplicate
        return ValidationResult.failure(
            ErrorCategory.INVALID_INSTANCE,
            f"Identifier '{name}' is used in declaration {first} and {second} of the robot instances",
        )

    known_types = {robot_type.name for robot_type in robot_types}
    for i, instance in enumerate(instances, start=1):
        if instance.robot_type not in known_types:
            return ValidationResult.failure(
                ErrorCategory.INVALID_INSTANCE,
                f"Robot type '{instance.robot_type}' was not declared and is used in "
                f"instance declaration {i}",
            )

    return ValidationResult.success()
