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
"""Tuning parameters for the chip target evaluation.

Every block is a plain dataclass so callers can build a configuration per
evaluation and hand it to the pipeline explicitly. ``DEFAULT_CONFIG`` exists
for the command line and loaders; evaluation code never reads it implicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class IndirectChipConfig:
    """Thresholds used when picking and projecting a chip target.

    Parameters
    ----------
    min_chip_tri_area : float, default=0.5
        Minimum area in square metres of a triangle worth chipping into.
    min_chip_tri_edge_len : float, default=0.8
        Minimum length in metres of every triangle edge.
    min_chip_tri_vertex_angle : float, default=0.0
        Minimum interior angle in degrees at every triangle vertex.
    chip_cherry_power_downscale : float, default=0.85
        Fraction of the ball-to-centroid distance actually chipped, leaving
        room for the ball to roll on after landing.
    max_chip_power : float, default=8.0
        Longest chip distance in metres the kicker can produce.
    chip_target_area_inset : float, default=0.3
        Margin in metres kept between the target area and the field edges.
    enemy_clearance_factor : float, default=2.5
        Multiple of the robot radius each triangle vertex is pulled inwards
        before checking it for enemy robots.
    """

    min_chip_tri_area: float = 0.5
    min_chip_tri_edge_len: float = 0.8
    min_chip_tri_vertex_angle: float = 0.0
    chip_cherry_power_downscale: float = 0.85
    max_chip_power: float = 8.0
    chip_target_area_inset: float = 0.3
    enemy_clearance_factor: float = 2.5

    def __post_init__(self) -> None:
        """Reject thresholds that would make the pipeline meaningless."""
        if not 0.0 < self.chip_cherry_power_downscale <= 1.0:
            raise ValueError("chip_cherry_power_downscale must be in (0, 1]")
        if self.max_chip_power <= 0.0:
            raise ValueError("max_chip_power must be positive")
        if self.enemy_clearance_factor <= 0.0:
            raise ValueError("enemy_clearance_factor must be positive")
        for name in (
            "min_chip_tri_area",
            "min_chip_tri_edge_len",
            "min_chip_tri_vertex_angle",
            "chip_target_area_inset",
        ):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must not be negative")


@dataclass(slots=True)
class RobotConfig:
    """Physical robot dimensions.

    Parameters
    ----------
    max_radius : float, default=0.09
        Largest radius of a robot footprint in metres.
    """

    max_radius: float = 0.09

    def __post_init__(self) -> None:
        """Ensure the robot has a footprint."""
        if self.max_radius <= 0.0:
            raise ValueError("max_radius must be positive")


@dataclass(slots=True)
class FieldConfig:
    """Default field dimensions used when a snapshot omits its geometry.

    Parameters
    ----------
    length : float, default=9.0
        Distance in metres between the two goal lines.
    width : float, default=6.0
        Distance in metres between the two touch lines.
    """

    length: float = 9.0
    width: float = 6.0

    def __post_init__(self) -> None:
        """Validate that both dimensions are positive."""
        if self.length <= 0.0 or self.width <= 0.0:
            raise ValueError("Field length and width must be positive")


@dataclass(slots=True)
class EvaluationConfig:
    """Top-level container passed to every evaluation call.

    Parameters
    ----------
    indirect_chip : IndirectChipConfig, default=IndirectChipConfig()
        Target selection and projection thresholds.
    robot : RobotConfig, default=RobotConfig()
        Robot footprint used to size the enemy clearance.
    field_size : FieldConfig, default=FieldConfig()
        Field dimensions used by the snapshot loader when a snapshot omits
        its geometry.
    """

    indirect_chip: IndirectChipConfig = field(default_factory=IndirectChipConfig)
    robot: RobotConfig = field(default_factory=RobotConfig)
    field_size: FieldConfig = field(default_factory=FieldConfig)

    @property
    def shrink_margin(self) -> float:
        """Return how far each triangle vertex is pulled towards the centroid."""
        return self.robot.max_radius * self.indirect_chip.enemy_clearance_factor


DEFAULT_CONFIG = EvaluationConfig()
"""Default configuration used by the command line and snapshot loaders."""
