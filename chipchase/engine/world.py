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
"""Read-only world snapshots consumed by the evaluation.

A snapshot is taken once per decision tick by whatever tracks the game and
is never modified afterwards. The field is centred on the origin with the
enemy goal on the positive x side.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from chipchase.engine.config import FieldConfig
from chipchase.engine.geometry import Point


@dataclass(frozen=True)
class Field:
    """Geometry of the enemy half needed to bound chip targets.

    Parameters
    ----------
    enemy_goal_x : float
        X coordinate of the enemy goal line.
    enemy_corner_pos : Point
        Enemy corner on the positive y touch line.
    enemy_corner_neg : Point
        Enemy corner on the negative y touch line.
    """

    enemy_goal_x: float
    enemy_corner_pos: Point
    enemy_corner_neg: Point

    @classmethod
    def from_dimensions(cls, length: float, width: float) -> "Field":
        """Build a centred field from its overall dimensions.

        Parameters
        ----------
        length : float
            Distance in metres between the goal lines.
        width : float
            Distance in metres between the touch lines.

        Returns
        -------
        Field
            Field whose enemy goal line sits at ``x = length / 2``.
        """
        if length <= 0 or width <= 0:
            raise ValueError("Field length and width must be positive")
        half_length = length / 2
        half_width = width / 2
        return cls(
            enemy_goal_x=half_length,
            enemy_corner_pos=Point(half_length, half_width),
            enemy_corner_neg=Point(half_length, -half_width),
        )

    @classmethod
    def from_config(cls, config: FieldConfig) -> "Field":
        """Build a field from a :class:`FieldConfig` block.

        Parameters
        ----------
        config : FieldConfig
            Configured field dimensions.

        Returns
        -------
        Field
            Field matching the configured length and width.
        """
        return cls.from_dimensions(config.length, config.width)


@dataclass(frozen=True)
class Robot:
    """Opposing robot observed in the snapshot.

    Parameters
    ----------
    robot_id : int
        Identifier of the robot within its team.
    position : Point
        Location of the robot centre.
    is_goalie : bool, optional
        Whether the robot currently plays as goalkeeper.
    """

    robot_id: int
    position: Point
    is_goalie: bool = False


@dataclass(frozen=True)
class Team:
    """Ordered collection of robots belonging to one side.

    Parameters
    ----------
    robots : Tuple[Robot, ...]
        Robots in tracking order. At most one may be tagged as goalie.
    """

    robots: Tuple[Robot, ...] = ()

    def __post_init__(self) -> None:
        """Ensure the team fields a single goalkeeper at most."""
        if sum(1 for r in self.robots if r.is_goalie) > 1:
            raise ValueError("Team can have at most one goalie")

    def positions(self) -> Tuple[Point, ...]:
        """Return the position of every robot, goalie included.

        Returns
        -------
        Tuple[Point, ...]
            Positions in tracking order.
        """
        return tuple(r.position for r in self.robots)

    def non_goalie_positions(self) -> Tuple[Point, ...]:
        """Return the positions of the outfield robots.

        Returns
        -------
        Tuple[Point, ...]
            Positions in tracking order with the goalie left out.
        """
        return tuple(r.position for r in self.robots if not r.is_goalie)

    def goalie(self) -> Optional[Robot]:
        """Return the robot tagged as goalie.

        Returns
        -------
        Optional[Robot]
            Goalie robot, or ``None`` when no robot carries the tag.
        """
        for robot in self.robots:
            if robot.is_goalie:
                return robot
        return None


@dataclass(frozen=True)
class Ball:
    """Ball state frozen for the duration of one evaluation.

    Parameters
    ----------
    position : Point
        Current ball location.
    """

    position: Point


@dataclass(frozen=True)
class World:
    """Everything the chip evaluation reads during one tick.

    Parameters
    ----------
    field : Field
        Field geometry.
    enemy_team : Team
        Opposing robots.
    ball : Ball
        Ball state.
    """

    field: Field
    enemy_team: Team
    ball: Ball
