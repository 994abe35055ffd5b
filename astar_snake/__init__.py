"""Per-tick A* food seeking for a 4-segment snake on an n x n grid."""

from .grid import DIRECTIONS, DOWN, LEFT, RIGHT, UP, Point, in_bounds
from .obstacles import build_obstacles
from .search import SEARCHES, a_star, bfs
from .strategy import (
    FALLBACK_MOVE,
    NO_TARGET,
    decide_direction,
    greedy_snake_move_barriers,
    greedy_snake_step,
    select_path,
)
