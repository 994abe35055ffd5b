"""
Grid model shared by the obstacle builder, the search engines and the engine.

Board coordinates run from 1 to n on both axes, (1,1) is bottom-left and y+
is up. The ring of cells at 0 and n+1 is wall.
"""

from typing import Iterator, NamedTuple


DEFAULT_BOARD_SIZE = 8

UP = 0
LEFT = 1
DOWN = 2
RIGHT = 3

# Expansion order for every search: up, left, down, right
DIRECTIONS = {
    UP: (0, 1),
    LEFT: (-1, 0),
    DOWN: (0, -1),
    RIGHT: (1, 0),
}

DIRECTION_NAMES = {
    UP: "up",
    LEFT: "left",
    DOWN: "down",
    RIGHT: "right",
}


class Point(NamedTuple):
    x: int
    y: int

    def manhattan(self, other: "Point") -> int:
        """Manhattan distance to another point."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def step(self, code: int) -> "Point":
        """Return the point one move away in the given direction."""
        dx, dy = DIRECTIONS[code]
        return Point(self.x + dx, self.y + dy)


def in_bounds(n: int, p: Point) -> bool:
    return 1 <= p.x <= n and 1 <= p.y <= n


def neighbors(p: Point) -> Iterator[Point]:
    """Yield the four orthogonal neighbours of p (up, left, down, right)."""
    for dx, dy in DIRECTIONS.values():
        yield Point(p.x + dx, p.y + dy)


def border_cells(n: int) -> Iterator[Point]:
    """Yield every wall cell one step outside the legal range."""
    for x in range(0, n + 2):
        yield Point(x, 0)
        yield Point(x, n + 1)
    for y in range(0, n + 2):
        yield Point(0, y)
        yield Point(n + 1, y)
