"""A* pathfinding over a 4-connected tile grid.

Stateless: every call builds and discards its own search structures. The
caller supplies the walkability predicate, typically terrain plus occupancy.
"""

import heapq
import itertools
import math
from typing import Callable

from .types import Position

WalkablePredicate = Callable[[int, int], bool]

DEFAULT_MAX_DISTANCE = 100


def manhattan_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    return abs(x2 - x1) + abs(y2 - y1)


def _orthogonal_neighbors(x: int, y: int) -> tuple[tuple[int, int], ...]:
    # Left, right, up, down
    return ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1))


def find_path(
    start_x: float,
    start_y: float,
    goal_x: float,
    goal_y: float,
    is_walkable: WalkablePredicate,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> list[Position] | None:
    """Find a shortest orthogonal path from start to goal.

    Coordinates are floored to tiles. The start tile itself is never checked
    for walkability. A node reached by a cheaper route is pushed again rather
    than updated in place, so when several shortest paths exist the one
    returned depends on heap order and may differ from other A* variants.

    Args:
        start_x, start_y: Start tile.
        goal_x, goal_y: Goal tile.
        is_walkable: Function(x, y) returning True if a tile can be entered.
        max_distance: Nodes whose path cost has reached this value are not
            expanded, bounding the search on unbounded maps.

    Returns:
        Positions from start to goal inclusive, or None if the goal is not
        walkable or not reachable within max_distance.
    """
    start = (math.floor(start_x), math.floor(start_y))
    goal = (math.floor(goal_x), math.floor(goal_y))

    if start == goal:
        return [Position(x=start[0], y=start[1])]

    if not is_walkable(*goal):
        return None

    # Priority queue: (f, insertion order, g, node); ties pop oldest first
    counter = itertools.count()
    open_heap: list[tuple[int, int, int, tuple[int, int]]] = [
        (manhattan_distance(*start, *goal), next(counter), 0, start)
    ]
    g_scores: dict[tuple[int, int], int] = {start: 0}
    parents: dict[tuple[int, int], tuple[int, int]] = {}
    closed: set[tuple[int, int]] = set()

    while open_heap:
        _, _, g, current = heapq.heappop(open_heap)

        # Skip entries superseded by a cheaper route
        if current in closed or g > g_scores[current]:
            continue

        if current == goal:
            return _reconstruct_path(parents, goal)

        if g >= max_distance:
            continue

        closed.add(current)

        for neighbor in _orthogonal_neighbors(*current):
            if neighbor in closed:
                continue
            if not is_walkable(*neighbor):
                continue

            tentative_g = g + 1
            previous_g = g_scores.get(neighbor)
            if previous_g is not None and tentative_g >= previous_g:
                continue

            g_scores[neighbor] = tentative_g
            parents[neighbor] = current
            f = tentative_g + manhattan_distance(*neighbor, *goal)
            heapq.heappush(open_heap, (f, next(counter), tentative_g, neighbor))

    return None


def _reconstruct_path(
    parents: dict[tuple[int, int], tuple[int, int]], goal: tuple[int, int]
) -> list[Position]:
    path = [goal]
    node = goal
    while node in parents:
        node = parents[node]
        path.append(node)
    path.reverse()
    return [Position(x=x, y=y) for x, y in path]


def find_nearest_orthogonal_position(
    start_x: int,
    start_y: int,
    target_x: int,
    target_y: int,
    is_walkable: WalkablePredicate,
) -> Position | None:
    """Pick the walkable tile beside a target that is closest to start.

    Candidates are checked left, right, up, down; on equal Manhattan
    distance the earlier candidate wins.

    Returns:
        The chosen neighbor, or None if no orthogonal neighbor is walkable.
    """
    closest: tuple[int, int] | None = None
    closest_dist = 0

    for x, y in _orthogonal_neighbors(target_x, target_y):
        if not is_walkable(x, y):
            continue
        dist = manhattan_distance(start_x, start_y, x, y)
        if closest is None or dist < closest_dist:
            closest = (x, y)
            closest_dist = dist

    if closest is None:
        return None
    return Position(x=closest[0], y=closest[1])
