"""
Snapshot parsing and per-tick obstacle modelling.

Snapshots arrive from the host as flat integer lists: every snake is 4
segments (head, second, third, tail) packed as 8 numbers, foods and barriers
are packed as (x, y) pairs. They are parsed once per call into Points.
"""

import logging

from .grid import Point, border_cells, neighbors

logger = logging.getLogger(__name__)

SNAKE_SEGMENTS = 4
SNAKE_VALUES = SNAKE_SEGMENTS * 2


def parse_points(flat) -> list[Point]:
    """Parse a flat [x0, y0, x1, y1, ...] list into Points."""
    return [Point(flat[i], flat[i + 1]) for i in range(0, len(flat) - 1, 2)]


def parse_snake(flat) -> list[Point]:
    """Parse one snake's 8 numbers into its 4-point body, head first."""
    return parse_points(flat[:SNAKE_VALUES])


def parse_bodies(flat) -> list[list[Point]]:
    """Split other snakes' flat data into 4-point bodies."""
    bodies = []
    for start in range(0, len(flat) - SNAKE_VALUES + 1, SNAKE_VALUES):
        bodies.append(parse_points(flat[start:start + SNAKE_VALUES]))
    return bodies


def build_obstacles(
    n: int,
    agent_count: int,
    self_body: list[Point],
    other_bodies: list[list[Point]],
) -> set[Point]:
    """
    Build the set of cells a path may not enter this tick.

    Blocks the caller's second segment, every other snake's segments except
    its tail (tails move away before anyone arrives), the wall ring, and with
    more than two snakes alive the four cells around each other snake's head,
    where a simultaneous move could end in a head-on collision.

    The caller's own head is never in the result.
    """
    head = self_body[0]
    obstacles = {self_body[1]}

    for body in other_bodies:
        obstacles.update(body[:SNAKE_SEGMENTS - 1])

    obstacles.update(border_cells(n))

    if agent_count > 2:
        for body in other_bodies:
            obstacles.update(neighbors(body[0]))

    obstacles.discard(head)
    logger.debug("built %d obstacles for head %s (%d snakes)", len(obstacles), head, agent_count)
    return obstacles


def build_barrier_obstacles(n: int, body: list[Point], barriers: list[Point]) -> set[Point]:
    """Obstacles for the single-snake variant: own body behind the head plus fixed barriers."""
    obstacles = set(body[1:])
    obstacles.update(barriers)
    obstacles.update(border_cells(n))
    obstacles.discard(body[0])
    return obstacles
