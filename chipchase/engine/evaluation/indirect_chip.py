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
"""Open-space search used to pick an indirect chip-and-chase target.

The evaluation looks for the largest pocket of space among the opposing
robots and aims a chip into it. It runs as a straight pipeline:

1. every triangle spanned by the outfield enemies and four fixed points on
   the enemy half is generated,
2. triangles that still hold an enemy after being shrunk by a robot-sized
   margin are dropped,
3. triangles whose centroid lies outside the legal target area (ahead of
   the ball, inset from the field edges) are dropped,
4. the largest triangle passing the area, edge and angle thresholds wins,
5. its centroid is turned into a target, shortened by the power downscale
   and capped at the maximum chip distance.

Each stage is a pure function so the pipeline can be exercised one step at
a time. Nothing is retained between calls; an absent target means no safe
chip exists this tick.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from chipchase.engine.config import EvaluationConfig, IndirectChipConfig
from chipchase.engine.geometry import Point, TargetArea, Triangle
from chipchase.engine.world import Field, World

if TYPE_CHECKING:
    from chipchase.utils.debug import EvaluationDebugger


def get_all_triangles(field: Field, enemy_positions: Sequence[Point]) -> List[Triangle]:
    """Build every triangle spanned by the enemies and the enemy-half corners.

    The enemy positions are extended by the two enemy corners and their
    projections onto the halfway line, then every 3-subset is emitted in
    ascending index order.

    Parameters
    ----------
    field : Field
        Field geometry providing the enemy corners.
    enemy_positions : Sequence[Point]
        Outfield enemy positions; the goalie should not be included.

    Returns
    -------
    List[Triangle]
        ``C(len(enemy_positions) + 4, 3)`` triangles.
    """
    all_points = list(enemy_positions)
    all_points.append(field.enemy_corner_neg)
    all_points.append(field.enemy_corner_pos)
    all_points.append(Point(0.0, field.enemy_corner_pos.y))
    all_points.append(Point(0.0, field.enemy_corner_neg.y))

    return [Triangle(p1, p2, p3) for p1, p2, p3 in combinations(all_points, 3)]


def filter_open_triangles(
    triangles: Sequence[Triangle], enemy_positions: Sequence[Point], shrink_margin: float
) -> List[Triangle]:
    """Keep the triangles that no enemy robot stands inside.

    Each triangle is shrunk first so the robots forming its vertices, and
    robots brushing its edges, do not count as being inside it.

    Parameters
    ----------
    triangles : Sequence[Triangle]
        Candidate triangles.
    enemy_positions : Sequence[Point]
        Every enemy position, goalie included.
    shrink_margin : float
        Distance in metres each vertex is pulled towards the centroid.

    Returns
    -------
    List[Triangle]
        Open triangles in input order, with their original vertices.
    """
    open_triangles: List[Triangle] = []
    for triangle in triangles:
        shrunk = triangle.shrink(shrink_margin)
        if not any(shrunk.contains(enemy) for enemy in enemy_positions):
            open_triangles.append(triangle)
    return open_triangles


def get_chip_target_area_corners(field: Field, ball_position: Point, inset: float) -> List[Point]:
    """Return the corners of the area a chip may land in.

    The area starts level with the ball and stops ``inset`` short of the
    enemy goal line and of both touch lines, whichever corner carries the
    negative y coordinate.

    Parameters
    ----------
    field : Field
        Field geometry.
    ball_position : Point
        Current ball location.
    inset : float
        Margin in metres kept from the field edges.

    Returns
    -------
    List[Point]
        Corners ordered ball-side negative y, ball-side positive y, goal-side
        negative y, goal-side positive y.
    """
    ball_x = ball_position.x
    field_x = field.enemy_goal_x - inset
    low_y, high_y = sorted((field.enemy_corner_neg.y, field.enemy_corner_pos.y))
    neg_field_y = low_y + inset
    pos_field_y = high_y - inset

    return [
        Point(ball_x, neg_field_y),
        Point(ball_x, pos_field_y),
        Point(field_x, neg_field_y),
        Point(field_x, pos_field_y),
    ]


def get_chip_target_area(field: Field, ball_position: Point, inset: float) -> TargetArea:
    """Return the normalised rectangle a chip target must fall inside.

    Parameters
    ----------
    field : Field
        Field geometry.
    ball_position : Point
        Current ball location.
    inset : float
        Margin in metres kept from the field edges.

    Returns
    -------
    TargetArea
        Closed rectangle spanning the target area corners.
    """
    return TargetArea.from_corners(get_chip_target_area_corners(field, ball_position, inset))


def remove_outofbounds_triangles(
    triangles: Sequence[Triangle], field: Field, ball_position: Point, inset: float
) -> List[Triangle]:
    """Drop the triangles whose centroid lies outside the chip target area.

    Parameters
    ----------
    triangles : Sequence[Triangle]
        Candidate triangles.
    field : Field
        Field geometry.
    ball_position : Point
        Current ball location.
    inset : float
        Margin in metres kept from the field edges.

    Returns
    -------
    List[Triangle]
        Triangles in input order whose centroid is inside the area, edges
        included.
    """
    area = get_chip_target_area(field, ball_position, inset)
    return [t for t in triangles if area.contains(t.centroid())]


def get_triangle_center_and_area(triangle: Triangle) -> Tuple[Point, float]:
    """Return the centroid and area of ``triangle``.

    Parameters
    ----------
    triangle : Triangle
        Triangle to measure.

    Returns
    -------
    Tuple[Point, float]
        Centroid and unsigned area.
    """
    return triangle.centroid(), triangle.area()


def is_valid_triangle(
    triangle: Triangle, min_area: float, min_edge_len: float, min_edge_angle: float = 0.0
) -> bool:
    """Check a triangle against the area, edge and angle thresholds.

    Parameters
    ----------
    triangle : Triangle
        Triangle to check.
    min_area : float
        Minimum area in square metres.
    min_edge_len : float
        Minimum length in metres of every edge.
    min_edge_angle : float, default=0.0
        Minimum interior angle in degrees at every vertex.

    Returns
    -------
    bool
        ``True`` when every threshold is met.
    """
    if triangle.area() < min_area:
        return False
    if any(length < min_edge_len for length in triangle.edge_lengths()):
        return False
    return all(angle >= min_edge_angle for angle in triangle.interior_angles())


def get_largest_triangle(
    triangles: Sequence[Triangle], min_area: float, min_edge_len: float, min_edge_angle: float = 0.0
) -> Optional[Triangle]:
    """Return the largest triangle that passes every threshold.

    When several valid triangles share the largest area the one appearing
    last in ``triangles`` is returned.

    Parameters
    ----------
    triangles : Sequence[Triangle]
        Candidate triangles.
    min_area : float
        Minimum area in square metres.
    min_edge_len : float
        Minimum length in metres of every edge.
    min_edge_angle : float, default=0.0
        Minimum interior angle in degrees at every vertex.

    Returns
    -------
    Optional[Triangle]
        Best valid triangle, or ``None`` when no triangle is valid.
    """
    largest: Optional[Triangle] = None
    largest_area = 0.0

    for triangle in triangles:
        if not is_valid_triangle(triangle, min_area, min_edge_len, min_edge_angle):
            continue
        area = triangle.area()
        if largest is None or area >= largest_area:
            largest = triangle
            largest_area = area

    return largest


def project_chip_target(
    triangle: Optional[Triangle], ball_position: Point, power_downscale: float, max_chip_power: float
) -> Optional[Point]:
    """Turn the winning triangle into the point the chip should land on.

    Parameters
    ----------
    triangle : Optional[Triangle]
        Winning triangle, or ``None`` when there is none.
    ball_position : Point
        Current ball location.
    power_downscale : float
        Fraction of the ball-to-centroid distance to chip.
    max_chip_power : float
        Longest chip distance in metres.

    Returns
    -------
    Optional[Point]
        Chip target, the ball position when the centroid sits on the ball,
        or ``None`` when there is no triangle.
    """
    if triangle is None:
        return None

    displacement = triangle.centroid() - ball_position
    distance = displacement.length()
    if distance == 0:
        return ball_position

    # Land short of the centroid; the ball keeps rolling after the bounce.
    displacement = displacement.normalize(distance * power_downscale)

    if displacement.length() > max_chip_power:
        displacement = displacement.normalize(max_chip_power)

    return ball_position + displacement


def indirect_chip_and_chase_target(
    triangles: Sequence[Triangle], ball_position: Point, chip_config: IndirectChipConfig
) -> Optional[Point]:
    """Pick the best triangle from ``triangles`` and project a target from it.

    Parameters
    ----------
    triangles : Sequence[Triangle]
        Triangles that already passed the open and bounds filters.
    ball_position : Point
        Current ball location.
    chip_config : IndirectChipConfig
        Selection and projection thresholds.

    Returns
    -------
    Optional[Point]
        Chip target, or ``None`` when no triangle qualifies.
    """
    largest = get_largest_triangle(
        triangles,
        chip_config.min_chip_tri_area,
        chip_config.min_chip_tri_edge_len,
        chip_config.min_chip_tri_vertex_angle,
    )
    return project_chip_target(
        largest,
        ball_position,
        chip_config.chip_cherry_power_downscale,
        chip_config.max_chip_power,
    )


@dataclass(frozen=True)
class IndirectChipResult:
    """Outcome of one evaluation together with every intermediate stage.

    Parameters
    ----------
    target : Optional[Point]
        Chip target, or ``None`` when no safe target exists.
    best_triangle : Optional[Triangle]
        Triangle the target was projected from.
    candidate_triangles : Tuple[Triangle, ...]
        Every generated triangle.
    open_triangles : Tuple[Triangle, ...]
        Triangles left after the enemy containment check.
    in_bounds_triangles : Tuple[Triangle, ...]
        Open triangles whose centroid lies inside the target area.
    target_area : TargetArea
        Rectangle used by the bounds check.
    """

    target: Optional[Point]
    best_triangle: Optional[Triangle]
    candidate_triangles: Tuple[Triangle, ...]
    open_triangles: Tuple[Triangle, ...]
    in_bounds_triangles: Tuple[Triangle, ...]
    target_area: TargetArea


class IndirectChipEvaluator:
    """Run the full chip target pipeline against world snapshots.

    The evaluator only stores its configuration and an optional debugger;
    every call to :meth:`evaluate` is independent of the previous ones.

    Parameters
    ----------
    config : EvaluationConfig
        Thresholds and robot dimensions used for every evaluation.
    debugger : EvaluationDebugger | None, optional
        Debugger receiving one line per pipeline stage when attached.
    """

    def __init__(self, config: EvaluationConfig, debugger: Optional["EvaluationDebugger"] = None) -> None:
        """Store the configuration and optional debugger.

        Parameters
        ----------
        config : EvaluationConfig
            Thresholds and robot dimensions used for every evaluation.
        debugger : EvaluationDebugger | None
            Debugger receiving one line per pipeline stage when attached.
        """
        self.config = config
        self.debugger = debugger

    def _log_stage(self, tick_time: float, stage: str, triangles: Sequence[Triangle]) -> None:
        """Record how many triangles survived ``stage``.

        Parameters
        ----------
        tick_time : float
            Timestamp of the decision tick in seconds.
        stage : str
            Name of the stage that just ran.
        triangles : Sequence[Triangle]
            Triangles the stage let through.
        """
        if self.debugger:
            self.debugger.log_stage(tick_time, stage, len(triangles))

    def evaluate(self, world: World, tick_time: float = 0.0) -> IndirectChipResult:
        """Run every pipeline stage on ``world``.

        Parameters
        ----------
        world : World
            Snapshot of the field, the enemy robots and the ball.
        tick_time : float, default=0.0
            Timestamp of the decision tick, used for logging only.

        Returns
        -------
        IndirectChipResult
            Target plus the triangles surviving each stage.
        """
        chip_cfg = self.config.indirect_chip
        ball_position = world.ball.position
        enemy_team = world.enemy_team

        if self.debugger:
            goalie = enemy_team.goalie()
            self.debugger.log_world_state(
                tick_time,
                (ball_position.x, ball_position.y),
                len(enemy_team.robots),
                goalie.robot_id if goalie is not None else None,
            )

        candidates = get_all_triangles(world.field, enemy_team.non_goalie_positions())
        self._log_stage(tick_time, "generate", candidates)

        open_triangles = filter_open_triangles(candidates, enemy_team.positions(), self.config.shrink_margin)
        self._log_stage(tick_time, "open", open_triangles)

        target_area = get_chip_target_area(world.field, ball_position, chip_cfg.chip_target_area_inset)
        in_bounds = [t for t in open_triangles if target_area.contains(t.centroid())]
        self._log_stage(tick_time, "bounds", in_bounds)

        best = get_largest_triangle(
            in_bounds,
            chip_cfg.min_chip_tri_area,
            chip_cfg.min_chip_tri_edge_len,
            chip_cfg.min_chip_tri_vertex_angle,
        )
        target = project_chip_target(
            best,
            ball_position,
            chip_cfg.chip_cherry_power_downscale,
            chip_cfg.max_chip_power,
        )

        if self.debugger:
            if best is None:
                self.debugger.log_evaluation_event(tick_time, "select", "no triangle met the thresholds")
            self.debugger.log_target(
                tick_time,
                (ball_position.x, ball_position.y),
                (target.x, target.y) if target is not None else None,
            )

        return IndirectChipResult(
            target=target,
            best_triangle=best,
            candidate_triangles=tuple(candidates),
            open_triangles=tuple(open_triangles),
            in_bounds_triangles=tuple(in_bounds),
            target_area=target_area,
        )

    def find_target(self, world: World, tick_time: float = 0.0) -> Optional[Point]:
        """Return only the chip target for ``world``.

        Parameters
        ----------
        world : World
            Snapshot of the field, the enemy robots and the ball.
        tick_time : float, default=0.0
            Timestamp of the decision tick, used for logging only.

        Returns
        -------
        Optional[Point]
            Chip target, or ``None`` when no safe target exists.
        """
        return self.evaluate(world, tick_time).target


def find_target_point_for_indirect_chip_and_chase(world: World, config: EvaluationConfig) -> Optional[Point]:
    """Return the chip target for ``world`` without logging.

    Parameters
    ----------
    world : World
        Snapshot of the field, the enemy robots and the ball.
    config : EvaluationConfig
        Thresholds and robot dimensions.

    Returns
    -------
    Optional[Point]
        Chip target, or ``None`` when no safe target exists.
    """
    triangles = get_all_triangles(world.field, world.enemy_team.non_goalie_positions())
    triangles = filter_open_triangles(triangles, world.enemy_team.positions(), config.shrink_margin)
    triangles = remove_outofbounds_triangles(
        triangles, world.field, world.ball.position, config.indirect_chip.chip_target_area_inset
    )
    return indirect_chip_and_chase_target(triangles, world.ball.position, config.indirect_chip)
