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
"""Pygame view of a single chip evaluation."""
from typing import Any, Tuple

try:
    import pygame
except ImportError:
    pygame = None

from chipchase.engine.evaluation.indirect_chip import IndirectChipResult
from chipchase.engine.geometry import Point
from chipchase.engine.world import World

GREEN = (38, 160, 72)
LINE = (245, 245, 245)
AREA = (250, 250, 100)
OPEN = (120, 200, 255)
BEST = (255, 140, 0)
ENEMY = (30, 90, 200)
GOALIE = (20, 20, 20)
BALL = (255, 165, 0)
TARGET = (220, 30, 30)
TEXT = (20, 20, 20)


def world_to_screen(
    pos: Point, field_length: float, field_width: float, screen_size: Tuple[int, int]
) -> Tuple[int, int]:
    """Map centred field coordinates to pixel coordinates.

    Parameters
    ----------
    pos : Point
        Location on the field in metres.
    field_length : float
        Distance between the goal lines in metres.
    field_width : float
        Distance between the touch lines in metres.
    screen_size : Tuple[int, int]
        Width and height of the drawing surface in pixels.

    Returns
    -------
    Tuple[int, int]
        Pixel position with the y axis pointing down.
    """
    w, h = screen_size
    sx = int((pos.x + field_length / 2) / field_length * w)
    sy = int((field_width / 2 - pos.y) / field_width * h)
    return sx, sy


def draw_evaluation(surface: Any, world: World, result: IndirectChipResult) -> None:
    """Draw the field, the surviving triangles and the chosen target.

    Parameters
    ----------
    surface : pygame.Surface
        Surface to draw on.
    world : World
        Snapshot the evaluation ran on.
    result : IndirectChipResult
        Outcome of the evaluation.
    """
    screen_size = surface.get_size()
    field = world.field
    length = 2 * field.enemy_goal_x
    width = abs(field.enemy_corner_pos.y - field.enemy_corner_neg.y)

    def w2s(pos: Point) -> Tuple[int, int]:
        return world_to_screen(pos, length, width, screen_size)

    surface.fill(GREEN)
    pygame.draw.rect(surface, LINE, surface.get_rect(), 4)
    pygame.draw.line(surface, LINE, (screen_size[0] // 2, 0), (screen_size[0] // 2, screen_size[1]), 2)

    pygame.draw.polygon(surface, AREA, [w2s(c) for c in result.target_area.corners()], 2)

    for triangle in result.in_bounds_triangles:
        pygame.draw.polygon(surface, OPEN, [w2s(p) for p in triangle], 1)
    if result.best_triangle is not None:
        pygame.draw.polygon(surface, BEST, [w2s(p) for p in result.best_triangle], 3)

    for robot in world.enemy_team.robots:
        pygame.draw.circle(surface, GOALIE if robot.is_goalie else ENEMY, w2s(robot.position), 9)

    ball_px = w2s(world.ball.position)
    pygame.draw.circle(surface, BALL, ball_px, 5)
    if result.target is not None:
        target_px = w2s(result.target)
        pygame.draw.line(surface, TARGET, ball_px, target_px, 2)
        pygame.draw.circle(surface, TARGET, target_px, 6, 2)


def show_evaluation(
    world: World, result: IndirectChipResult, screen_size: Tuple[int, int] = (900, 600), fps: int = 30
) -> None:
    """Open a window showing ``result`` until it is closed.

    If ``pygame`` is not installed the function returns immediately.

    Parameters
    ----------
    world : World
        Snapshot the evaluation ran on.
    result : IndirectChipResult
        Outcome of the evaluation.
    screen_size : Tuple[int, int], default=(900, 600)
        Initial window size in pixels.
    fps : int, default=30
        Redraw rate of the window.
    """
    if pygame is None:
        print("pygame is not installed; skipping the visualiser")
        return

    pygame.init()
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    pygame.display.set_caption("Chip Target Evaluation")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 18)

    if result.target is not None:
        status = f"Target: ({result.target.x:.2f}, {result.target.y:.2f})"
    else:
        status = "No chip target available"

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)

        draw_evaluation(screen, world, result)
        screen.blit(font.render(status, True, TEXT), (10, 10))
        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
