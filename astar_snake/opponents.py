"""
Opponent strategies for local games.

Every strategy takes the same flat snapshot as greedy_snake_step and returns a
direction code:
1. random-valid - any move that doesn't hit a wall or a body
2. greedy - one-step heuristic toward the nearest food, no search
3. bfs-seeker - the food seeker driven by breadth-first search
"""

import random
from functools import partial

from .grid import DIRECTIONS, LEFT, RIGHT, UP, DOWN, in_bounds
from .obstacles import parse_bodies, parse_points, parse_snake
from .search import bfs
from .strategy import FALLBACK_MOVE, greedy_snake_step, nearest_food


# ── Shared utilities ──────────────────────────────────────────────

def get_occupied(body, others):
    """Return set of cells covered by any snake."""
    occupied = set(body)
    for other in others:
        occupied.update(other)
    return occupied


def safe_moves(n, head, occupied):
    """Return dict of code -> Point for moves staying on the board and off every body."""
    moves = {code: head.step(code) for code in DIRECTIONS}
    return {code: p for code, p in moves.items() if in_bounds(n, p) and p not in occupied}


# ── Strategy 1: Random Valid ──────────────────────────────────────

def random_valid(n, snake, snake_num, other_snakes, food_num, foods, turn) -> int:
    body = parse_snake(snake)
    occupied = get_occupied(body, parse_bodies(other_snakes))
    safe = safe_moves(n, body[0], occupied)
    return random.choice(list(safe)) if safe else FALLBACK_MOVE


# ── Strategy 2: Greedy ────────────────────────────────────────────
# Steps straight toward the nearest food, x axis first. Only refuses to
# reverse into its own neck or off the board.

def greedy(n, snake, snake_num, other_snakes, food_num, foods, turn) -> int:
    body = parse_snake(snake)
    head, second = body[0], body[1]
    options = {code for code in DIRECTIONS
               if in_bounds(n, head.step(code)) and head.step(code) != second}
    if not options:
        return FALLBACK_MOVE

    target = nearest_food(head, parse_points(foods)[:max(food_num, 0)])
    if target is not None:
        dx, dy = target.x - head.x, target.y - head.y
        if dx > 0 and RIGHT in options:
            return RIGHT
        if dx < 0 and LEFT in options:
            return LEFT
        if dy > 0 and UP in options:
            return UP
        if dy < 0 and DOWN in options:
            return DOWN

    return min(options)


# ── Strategy 3: BFS Seeker ────────────────────────────────────────

bfs_seeker = partial(greedy_snake_step, search=bfs)


# Registry for easy access
STRATEGIES = {
    "random-valid": random_valid,
    "greedy": greedy,
    "bfs-seeker": bfs_seeker,
}
