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

"""Tests for area geometry validation."""

from robotscript.ast import Area, AreaKind, Point
from robotscript.geometry import (
    areas_overlap,
    point_in_rectangle,
    points_in_order,
    validate_areas,
)
from robotscript.results import ErrorCategory


def area(name, ax, ay, bx, by, kind=AreaKind.SHARED):
    return Area(name, kind, Point(ax, ay), Point(bx, by))


class TestHelpers:
    """Tests for the rectangle helpers."""

    def test_point_in_rectangle_is_inclusive(self):
        a, b = Point(1, 1), Point(5, 5)
        assert point_in_rectangle(Point(1, 1), a, b)
        assert point_in_rectangle(Point(5, 5), a, b)
        assert point_in_rectangle(Point(3, 4), a, b)
        assert not point_in_rectangle(Point(6, 5), a, b)
        assert not point_in_rectangle(Point(3, 0), a, b)

    def test_points_in_order(self):
        assert points_in_order(Point(1, 1), Point(1, 1))
        assert points_in_order(Point(1, 1), Point(4, 2))
        assert not points_in_order(Point(5, 1), Point(4, 2))
        assert not points_in_order(Point(1, 5), Point(4, 2))

    def test_overlap_is_symmetric(self):
        pairs = [
            ((Point(1, 1), Point(10, 10)), (Point(5, 5), Point(8, 8))),
            ((Point(1, 1), Point(5, 5)), (Point(5, 5), Point(9, 9))),
            ((Point(1, 1), Point(5, 5)), (Point(6, 1), Point(9, 5))),
        ]
        for first, second in pairs:
            assert areas_overlap(*first, *second) == areas_overlap(*second, *first)

    def test_containment_overlaps(self):
        assert areas_overlap(Point(1, 1), Point(10, 10), Point(5, 5), Point(8, 8))

    def test_shared_corner_overlaps(self):
        assert areas_overlap(Point(1, 1), Point(5, 5), Point(5, 5), Point(9, 9))

    def test_disjoint(self):
        assert not areas_overlap(Point(1, 1), Point(5, 5), Point(6, 1), Point(9, 5))
        assert not areas_overlap(Point(1, 1), Point(5, 5), Point(1, 6), Point(5, 9))


class TestValidateAreas:
    """Tests for validate_areas."""

    def test_no_areas(self):
        assert validate_areas([]).is_valid

    def test_disjoint_areas_valid(self):
        areas = [
            area("A", 1, 1, 5, 5),
            area("B", 6, 1, 10, 5, AreaKind.PRIVATE),
            area("C", 1, 6, 100, 100, AreaKind.SEMI_PRIVATE),
        ]
        assert validate_areas(areas).is_valid

    def test_overlapping_areas(self):
        """A private area inside a shared one is rejected."""
        areas = [area("A", 1, 1, 10, 10), area("B", 5, 5, 8, 8, AreaKind.PRIVATE)]
        result = validate_areas(areas)
        assert result.category == ErrorCategory.INVALID_AREA
        assert result.context == "Area 'A' shares points with area 'B'"

    def test_touching_edges_overlap(self):
        areas = [area("A", 1, 1, 5, 5), area("B", 5, 1, 10, 5)]
        result = validate_areas(areas)
        assert not result.is_valid
        assert "shares points" in result.context

    def test_first_point_out_of_range(self):
        result = validate_areas([area("A", 0, 1, 5, 5)])
        assert result.context == (
            "The first point of area 'A' must have coordinates between 1 and 100 on each axis"
        )

    def test_second_point_out_of_range(self):
        result = validate_areas([area("A", 1, 1, 101, 5)])
        assert result.context.startswith("The second point of area 'A'")

    def test_both_points_out_of_range(self):
        result = validate_areas([area("A", 0, 0, 101, 101)])
        assert result.context.startswith("Both points of area 'A'")

    def test_points_out_of_order(self):
        result = validate_areas([area("A", 5, 5, 1, 1)])
        assert result.category == ErrorCategory.INVALID_AREA
        assert "must be greater than or equal" in result.context

    def test_points_out_of_order_on_one_axis(self):
        result = validate_areas([area("A", 1, 5, 5, 1)])
        assert "must be greater than or equal" in result.context

    def test_single_point_area(self):
        assert validate_areas([area("A", 3, 3, 3, 3)]).is_valid

    def test_duplicate_name(self):
        areas = [area("A", 1, 1, 2, 2), area("B", 3, 3, 4, 4), area("A", 5, 5, 6, 6)]
        result = validate_areas(areas)
        assert result.context == "Identifier 'A' is used in the declaration of area 1 and 3"

    def test_duplicate_name_reported_before_overlap(self):
        areas = [area("A", 1, 1, 5, 5), area("A", 2, 2, 3, 3)]
        result = validate_areas(areas)
        assert "Identifier 'A'" in result.context

    def test_range_checked_before_overlap(self):
        areas = [area("A", 1, 1, 10, 10), area("B", 5, 5, 200, 8)]
        result = validate_areas(areas)
        assert result.context.startswith("The second point of area 'B'")

    def test_custom_bounds(self):
        result = validate_areas([area("A", 1, 1, 20, 20)], min_coordinate=1, max_coordinate=10)
        assert result.context == (
            "The second point of area 'A' must have coordinates between 1 and 10 on each axis"
        )
