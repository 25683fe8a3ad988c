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

"""Area geometry checks.

Validates area declarations in source order:
- both corner points inside the city grid
- lower-left point not above or right of the upper-right point
- names unique across areas
- no two areas share a point (touching edges count)
"""

from collections.abc import Sequence

from .ast import Area, Point
from .results import ErrorCategory, ValidationResult

GRID_MIN = 1
GRID_MAX = 100


def point_in_rectangle(point: Point, a: Point, b: Point) -> bool:
    """Return True if *point* lies in the closed rectangle a-b."""
    return a.x <= point.x <= b.x and a.y <= point.y <= b.y


def points_in_order(a: Point, b: Point) -> bool:
    """Return True if *a* is less than or equal to *b* on both axes."""
    return a.x <= b.x and a.y <= b.y


def areas_overlap(a1: Point, b1: Point, a2: Point, b2: Point) -> bool:
    """Return True if rectangles a1-b1 and a2-b2 have at least one point in common."""
    if b1.x < a2.x:
        return False
    if a1.y > b2.y:
        return False
    if a1.x > b2.x:
        return False
    if b1.y < a2.y:
        return False
    return True


def validate_areas(
    areas: Sequence[Area],
    min_coordinate: int = GRID_MIN,
    max_coordinate: int = GRID_MAX,
) -> ValidationResult:
    """Validate area declarations, stopping at the first invalid one.

    Args:
        areas: Area declarations in source order
        min_coordinate: Smallest valid coordinate on either axis
        max_coordinate: Largest valid coordinate on either axis

    Returns:
        ValidationResult with the first error found, if any
    """
    low = Point(min_coordinate, min_coordinate)
    high = Point(max_coordinate, max_coordinate)
    bounds = f"between {min_coordinate} and {max_coordinate} on each axis"

    for i, area in enumerate(areas):
        a_valid = point_in_rectangle(area.a, low, high)
        b_valid = point_in_rectangle(area.b, low, high)

        if not a_valid and b_valid:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA,
                f"The first point of area '{area.name}' must have coordinates {bounds}",
            )
        if a_valid and not b_valid:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA,
                f"The second point of area '{area.name}' must have coordinates {bounds}",
            )
        if not a_valid and not b_valid:
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA,
                f"Both points of area '{area.name}' must have coordinates {bounds}",
            )

        if not points_in_order(area.a, area.b):
            return ValidationResult.failure(
                ErrorCategory.INVALID_AREA,
                f"The coordinates of the second point of area '{area.name}' must be "
                f"greater than or equal to those of the first point",
            )

        for j, previous in enumerate(areas[:i]):
            if previous.name == area.name:
                return ValidationResult.failure(
                    ErrorCategory.INVALID_AREA,
                    f"Identifier '{area.name}' is used in the declaration of area {j + 1} and {i + 1}",
                )
            if areas_overlap(previous.a, previous.b, area.a, area.b):
                return ValidationResult.failure(
                    ErrorCategory.INVALID_AREA,
                    f"Area '{previous.name}' shares points with area '{area.name}'",
                )

    return ValidationResult.success()
