"""Nearest-insertion construction of a tour."""

from __future__ import annotations

from collections.abc import Sequence

from tourbench.geometry import Point, TSPResult, dist, path_length


def best_insertion_position(
    path: Sequence[int], city: int, points: Sequence[Point]
) -> int:
    """Position in ``path`` where inserting ``city`` adds the least length."""
    if len(path) < 2:
        raise ValueError("insertion needs a path with at least one edge")
    target = points[city]

    def increase(pos: int) -> float:
        u, v = points[path[pos - 1]], points[path[pos]]
        return dist(u, target) + dist(target, v) - dist(u, v)

    return min(range(1, len(path)), key=increase)


def nearest_insertion(points: Sequence[Point]) -> TSPResult:
    """Grow a tour by inserting the city closest to it at its cheapest spot."""
    n = len(points)
    if n < 2:
        raise ValueError("nearest insertion needs at least two points")
    start = 0
    nearest = min(range(1, n), key=lambda i: dist(points[start], points[i]))
    path = [start, nearest, start]
    visited = {start, nearest}

    for _ in range(2, n):
        next_city = min(
            (city for city in range(n) if city not in visited),
            key=lambda city: min(dist(points[city], points[p]) for p in path),
        )
        path.insert(best_insertion_position(path, next_city, points), next_city)
        visited.add(next_city)

    return TSPResult(path, path_length(path, points))