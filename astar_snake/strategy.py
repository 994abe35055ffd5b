"""
Per-tick decision: pick the closest reachable food and turn the first step of
the path into a direction code.

    greedy_snake_step(n, snake, snake_num, other_snakes, food_num, foods, turn)

returns 0 (up), 1 (left), 2 (down) or 3 (right); NO_TARGET when the nearest
food cell itself is blocked, FALLBACK_MOVE when no food can be reached.
"""

import logging
from typing import Optional

from .grid import DEFAULT_BOARD_SIZE, DIRECTIONS, Point, in_bounds
from .obstacles import (
    build_barrier_obstacles,
    build_obstacles,
    parse_bodies,
    parse_points,
    parse_snake,
)
from .search import SearchFunc, a_star, bfs

logger = logging.getLogger(__name__)

# No reachable food: arbitrary default, not a real decision
FALLBACK_MOVE = 0
NO_TARGET = -1
INVALID_DIRECTION = -1

_CODES_BY_OFFSET = {offset: code for code, offset in DIRECTIONS.items()}


def decide_direction(head: Point, nxt: Point) -> int:
    """Map a single step from head to nxt onto a direction code."""
    return _CODES_BY_OFFSET.get((nxt.x - head.x, nxt.y - head.y), INVALID_DIRECTION)


def nearest_food(head: Point, foods: list[Point]) -> Optional[Point]:
    """Closest food by Manhattan distance, first one on ties."""
    if not foods:
        return None
    return min(foods, key=head.manhattan)


def select_path(
    n: int,
    head: Point,
    foods: list[Point],
    obstacles: set,
    search: SearchFunc = a_star,
) -> Optional[list[Point]]:
    """Shortest path to any food; the first candidate wins ties, unreachable ones are skipped."""
    best_path = None
    for food in foods:
        path = search(n, head, food, obstacles)
        if path is None:
            continue
        if best_path is None or len(path) < len(best_path):
            best_path = path
    return best_path


def greedy_snake_step(
    n: int,
    snake,
    snake_num: int,
    other_snakes,
    food_num: int,
    foods,
    turn: int,
    *,
    search: SearchFunc = a_star,
) -> int:
    body = parse_snake(snake)
    others = parse_bodies(other_snakes)
    candidates = parse_points(foods)[:max(food_num, 0)]
    head = body[0]

    obstacles = build_obstacles(n, snake_num, body, others)

    target = nearest_food(head, candidates)
    if target is not None and (not in_bounds(n, target) or target in obstacles):
        logger.debug("turn %s: nearest food %s is blocked", turn, target)
        return NO_TARGET

    path = select_path(n, head, candidates, obstacles, search)
    if path is not None and len(path) > 1:
        logger.debug("turn %s: heading for %s in %d steps", turn, path[-1], len(path) - 1)
        return decide_direction(head, path[1])

    logger.debug("turn %s: no reachable food, default move", turn)
    return FALLBACK_MOVE


def greedy_snake_move_barriers(
    snake,
    fruit,
    barriers,
    *,
    n: int = DEFAULT_BOARD_SIZE,
    search: SearchFunc = bfs,
) -> int:
    """
    Single-snake decision with a fixed list of barrier cells.

    Args:
        snake: own body as 8 numbers, head first
        fruit: the fruit as [x, y]
        barriers: flat list of blocked (x, y) pairs
        n: board size
        search: search engine, BFS unless told otherwise

    Returns:
        Direction code of the first step, or NO_TARGET when the fruit is
        blocked or cannot be reached.
    """
    body = parse_snake(snake)
    target = Point(fruit[0], fruit[1])
    obstacles = build_barrier_obstacles(n, body, parse_points(barriers))

    if not in_bounds(n, target) or target in obstacles:
        return NO_TARGET

    path = search(n, body[0], target, obstacles)
    if path is None or len(path) < 2:
        return NO_TARGET
    return decide_direction(body[0], path[1])
