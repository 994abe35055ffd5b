"""
Shortest-path search from a snake's head to a food cell.

Every search shares one contract:

    search(n, start, goal, obstacles) -> list[Point] | None

The returned path runs from start to goal inclusive. Cells outside [1, n] and
cells in the obstacle set are never entered.
"""

from collections import deque
from heapq import heappop, heappush
from typing import Callable, Optional

from .grid import Point, in_bounds, neighbors

SearchFunc = Callable[[int, Point, Point, set], Optional[list[Point]]]


def _reconstruct(came_from: dict, current: Point) -> list[Point]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def a_star(n: int, start: Point, goal: Point, obstacles: set) -> Optional[list[Point]]:
    """
    A* over the 4-connected grid with unit step cost.

    The Manhattan heuristic is admissible and consistent here, so the first
    time the goal is popped its path is a shortest one. Equal-f entries pop in
    heap order, so which of several shortest paths comes back is unspecified.
    """
    g_score = {start: 0}
    came_from = {}
    # (f, g, point)
    open_heap = [(start.manhattan(goal), 0, start)]

    while open_heap:
        _, g, current = heappop(open_heap)
        if current == goal:
            return _reconstruct(came_from, current)

        # Stale entry, a cheaper route to this cell was pushed later
        if g > g_score[current]:
            continue

        for nxt in neighbors(current):
            if not in_bounds(n, nxt) or nxt in obstacles:
                continue
            tentative_g = g + 1
            if tentative_g < g_score.get(nxt, float("inf")):
                came_from[nxt] = current
                g_score[nxt] = tentative_g
                heappush(open_heap, (tentative_g + nxt.manhattan(goal), tentative_g, nxt))

    return None


def bfs(n: int, start: Point, goal: Point, obstacles: set) -> Optional[list[Point]]:
    """Breadth-first search, same contract as a_star."""
    came_from = {}
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == goal:
            return _reconstruct(came_from, current)
        for nxt in neighbors(current):
            if nxt in visited or not in_bounds(n, nxt) or nxt in obstacles:
                continue
            visited.add(nxt)
            came_from[nxt] = current
            queue.append(nxt)

    return None


SEARCHES: dict[str, SearchFunc] = {
    "astar": a_star,
    "bfs": bfs,
}
