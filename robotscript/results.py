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

"""Validation verdicts.

Every check returns a value instead of raising: a :class:`ValidationResult`
for declarations and statements, an :class:`ExpressionResult` for type
inference. Callers add context on the way up by building new values.
"""

from dataclasses import dataclass, replace


class ErrorCategory:
    """Short labels shown ahead of an error's context."""

    INVALID_AREA = "Invalid area declaration"
    INVALID_INSTANCE = "Invalid instance declaration"
    INVALID_AREA_ASSIGNMENT = "Invalid area assignment"
    UNASSIGNED_AREA = "Unassigned area"
    INVALID_ITEM_ASSIGNMENT = "Invalid item assignment"
    INVALID_INITIALIZATION = "Invalid initialization"
    INVALID_ASSIGNMENT = "Invalid value assignment"
    INVALID_CONDITION = "Invalid condition"
    INVALID_CONDITION_RESULT = "Invalid condition result"
    INVALID_ARGUMENT = "Invalid argument"
    INVALID_CALL = "Invalid procedure call"
    INVALID_PROCEDURE = "Invalid procedure declaration"
    INVALID_PARAMETER = "Invalid parameter declaration"
    INVALID_VARIABLE = "Invalid variable declaration"
    INVALID_ROBOT_TYPE = "Invalid robot type declaration"
    INTERNAL = "Internal validator error"


@dataclass(frozen=True)
class ValidationError:
    """A semantic validation error.

    ``internal`` marks a broken input contract (a node the validator does
    not know how to check) as opposed to a defect in the user's program.
    """

    category: str
    context: str
    internal: bool = False

    def __str__(self) -> str:
        return f"{self.category}: {self.context}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a check: no error, or exactly one error."""

    error: ValidationError | None = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, category: str, context: str) -> "ValidationResult":
        return cls(ValidationError(category, context))

    @classmethod
    def internal_failure(cls, context: str) -> "ValidationResult":
        return cls(ValidationError(ErrorCategory.INTERNAL, context, internal=True))

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def is_internal(self) -> bool:
        return self.error is not None and self.error.internal

    @property
    def category(self) -> str:
        return self.error.category if self.error else ""

    @property
    def context(self) -> str:
        return self.error.context if self.error else ""

    @property
    def errors(self) -> list[ValidationError]:
        """Errors as a list (empty or one element) for report loops."""
        return [self.error] if self.error else []

    def with_context(self, suffix: str) -> "ValidationResult":
        """Return a copy whose error context has *suffix* appended."""
        if self.error is None:
            return self
        return ValidationResult(replace(self.error, context=f"{self.error.context}{suffix}"))


@dataclass(frozen=True)
class ExpressionResult:
    """Inferred type of an expression, or the reason it could not be typed."""

    value_type: str | None = None
    message: str = ""
    internal: bool = False

    @classmethod
    def of(cls, value_type: str) -> "ExpressionResult":
        return cls(value_type=value_type)

    @classmethod
    def failure(cls, message: str) -> "ExpressionResult":
        return cls(message=message)

    @classmethod
    def internal_failure(cls, message: str) -> "ExpressionResult":
        return cls(message=message, internal=True)

    @property
    def is_valid(self) -> bool:
        return self.value_type is not None

    def as_validation(self, category: str, suffix: str = "") -> ValidationResult:
        """Lift a failed inference into a statement-level result."""
        if self.is_valid:
            return ValidationResult.success()
        if self.internal:
            return ValidationResult.internal_failure(self.message)
        return ValidationResult.failure(category, f"{self.message}{suffix}")
