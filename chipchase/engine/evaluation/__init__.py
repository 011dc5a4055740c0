# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Stage functions and evaluator for indirect chip-and-chase targets."""
from __future__ import annotations

from .indirect_chip import (
    IndirectChipEvaluator,
    IndirectChipResult,
    filter_open_triangles,
    find_target_point_for_indirect_chip_and_chase,
    get_all_triangles,
    get_chip_target_area,
    get_chip_target_area_corners,
    get_largest_triangle,
    get_triangle_center_and_area,
    indirect_chip_and_chase_target,
    is_valid_triangle,
    project_chip_target,
    remove_outofbounds_triangles,
)

__all__ = [
    "IndirectChipEvaluator",
    "IndirectChipResult",
    "filter_open_triangles",
    "find_target_point_for_indirect_chip_and_chase",
    "get_all_triangles",
    "get_chip_target_area",
    "get_chip_target_area_corners",
    "get_largest_triangle",
    "get_triangle_center_and_area",
    "indirect_chip_and_chase_target",
    "is_valid_triangle",
    "project_chip_target",
    "remove_outofbounds_triangles",
]
