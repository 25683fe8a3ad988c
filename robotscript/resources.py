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

"""Initialization checks: area assignment, starting inventory and origins.

The bookkeeping here is rebuilt on every call and thrown away afterwards:
- :class:`AreaUsage` tracks how many instances hold an area against its capacity
- :class:`InstanceAccount` tracks what each instance has been given so far
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .ast import Area, AreaKind, InitBlock, Instance, Point
from .geometry import point_in_rectangle
from .results import ErrorCategory, ValidationResult

DEFAULT_ITEM_KINDS = ("flower", "paper")


@dataclass
class AreaUsage:
    """Occupancy counter for one area.

    Attributes:
        area: The declared area
        maximum: How many instances may be assigned this area
        current: How many instances have been assigned so far
    """

    area: Area
    maximum: int
    current: int = 0

    @classmethod
    def for_area(cls, area: Area, instance_count: int) -> "AreaUsage":
        return cls(area=area, maximum=AreaKind.capacity(area.kind, instance_count))

    @property
    def is_full(self) -> bool:
        return self.current >= self.maximum

    @property
    def is_used(self) -> bool:
        return self.current > 0

    def claim(self) -> None:
        """Record one more instance holding this area."""
        if self.is_full:
            raise ValueError(f"Area '{self.area.name}' is already at capacity {self.maximum}")
        self.current += 1


@dataclass
class InstanceAccount:
    """What an instance has been assigned during initialization."""

    name: str
    areas: list[str] = field(default_factory=list)
    inventory: dict[str, int | None] = field(default_factory=dict)
    origin: Point | None = None

    @classmethod
    def for_instance(cls, instance: Instance, item_kinds: Iterable[str]) -> "InstanceAccount":
        return cls(name=instance.name, inventory={kind: None for kind in item_kinds})


def validate_inits(
    init: InitBlock,
    instances: Sequence[Instance],
    areas: Sequence[Area],
    item_kinds: Sequence[str] = DEFAULT_ITEM_KINDS,
) -> ValidationResult:
    """Validate the program's initialization declarations.

    Runs in order: area assignments, unassigned areas and instances, item
    assignments, origins, missing origins. The first error ends the check.
    """
    usages = {area.name: AreaUsage.for_area(area, len(instances)) for area in areas}
    accounts: dict[str, InstanceAccount] = {}
    for instance in instances:
        accounts.setdefault(instance.name, InstanceAccount.for_instance(instance, item_kinds))

    result = _assign_areas(init, usages, accounts)
    if result.has_error:
        return result

    result = _check_all_assigned(usages, accounts)
    if result.has_error:
        return result

    result = _assign_items(init, accounts, item_kinds)
    if result.has_error:
        return result

    return _assign_origins(init, usages, accounts)


def _assign_areas(
    init: InitBlock, usages: dict[str, AreaUsage], accounts: dict[str, InstanceAccount]
) -> ValidationResult:
    for i, assignment in enumerate(init.areas, start=1):
        usage = usages.get(assignment.area)
        if usage is None:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA_ASSIGNMENT,
                f"Area '{assignment.area}' was not declared and is used in area assignment {i}",
            )

        account = accounts.get(assignment.instance)
        if account is None:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA_ASSIGNMENT,
                f"Instance '{assignment.instance}' was not declared and is used in "
                f"area assignment {i}",
            )

        if usage.is_full:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA_ASSIGNMENT,
                f"The assignment limit ({usage.maximum}) for area '{assignment.area}' "
                f"was exceeded in area assignment {i}",
            )

        if assignment.area in account.areas:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA_ASSIGNMENT,
                f"Area '{assignment.area}' was already assigned to instance '{account.name}'",
            )

        usage.claim()
        account.areas.append(assignment.area)

    return ValidationResult.success()


def _check_all_assigned(
    usages: dict[str, AreaUsage], accounts: dict[str, InstanceAccount]
) -> ValidationResult:
    for name, usage in usages.items():
        if not usage.is_used:
            return ValidationResult.failure(
                ErrorCategory.UNASSIGNED_AREA,
                f"Area '{name}' was not assigned to any instance",
            )

    for account in accounts.values():
        if not account.areas:
            return ValidationResult.failure(
                ErrorCategory.UNASSIGNED_AREA,
                f"Instance '{account.name}' has no area assigned",
            )

    return ValidationResult.success()


def _assign_items(
    init: InitBlock, accounts: dict[str, InstanceAccount], item_kinds: Sequence[str]
) -> ValidationResult:
    for i, assignment in enumerate(init.items, start=1):
        account = accounts.get(assignment.instance)
        if account is None:
            return ValidationResult.failure(
                ErrorCategory.INVALID_ITEM_ASSIGNMENT,
                f"Instance '{assignment.instance}' was not declared and is used in "
                f"item assignment {i}",
            )

        for kind in assignment.items:
            if kind not in item_kinds:
                return ValidationResult.failure(
                    ErrorCategory.INVALID_ITEM_ASSIGNMENT,
                    f"Item kind '{kind}' is not valid and is used in item assignment {i}",
                )
            if account.inventory[kind] is not None:
                return ValidationResult.failure(
                    ErrorCategory.INVALID_ITEM_ASSIGNMENT,
                    f"The quantity of item '{kind}' was already assigned to instance "
                    f"'{account.name}'",
                )
            account.inventory[kind] = assignment.quantity

    return ValidationResult.success()


def _assign_origins(
    init: InitBlock, usages: dict[str, AreaUsage], accounts: dict[str, InstanceAccount]
) -> ValidationResult:
    for i, assignment in enumerate(init.origins, start=1):
        account = accounts.get(assignment.instance)
        if account is None:
            return ValidationResult.failure(
                ErrorCategory.INVALID_INITIALIZATION,
                f"Instance '{assignment.instance}' was not declared and is used in "
                f"initialization {i}",
            )

        if account.origin is not None:
            return ValidationResult.failure(
                ErrorCategory.INVALID_INITIALIZATION,
                f"Instance '{account.name}' can only have one starting point, second point "
                f"in initialization {i}",
            )

        origin = assignment.origin
        inside = any(
            point_in_rectangle(origin, usages[name].area.a, usages[name].area.b)
            for name in account.areas
        )
        if not inside:
            return ValidationResult.failure(
                ErrorCategory.INVALID_INITIALIZATION,
                f"The starting point of instance '{account.name}' does not belong to any of "
                f"its areas in initialization {i}",
            )

        for other in accounts.values():
            if other.origin == origin:
                return ValidationResult.failure(
                    ErrorCategory.INVALID_INITIALIZATION,
                    f"Instances '{other.name}' and '{account.name}' have the same starting point",
                )

        account.origin = origin

    for account in accounts.values():
        if account.origin is None:
            return ValidationResult.failure(
                ErrorCategory.INVALID_INITIALIZATION,
                f"No starting point was assigned to instance '{account.name}'",
            )

    return ValidationResult.success()
