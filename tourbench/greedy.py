"""Nearest-neighbour construction of a tour."""

from __future__ import annotations

from collections.abc import Container, Sequence

from tourbench.geometry import Point, TSPResult, dist


def find_nearest(
    current: int, points: Sequence[Point], visited: Container[int]
) -> int | None:
    """Index of the closest city not in ``visited``, or None if all are."""
    origin = points[current]
    return min(
        (i for i in range(len(points)) if i not in visited),
        key=lambda i: dist(origin, points[i]),
        default=None,
    )


def greedy(points: Sequence[Point]) -> TSPResult:
    """Always move to the nearest unvisited city, then return to city 0."""
    if not points:
        raise ValueError("greedy needs at least one point")
    current = 0
    visited = {current}
    path = [current]
    total = 0.0

    for _ in range(1, len(points)):
        nxt = find_nearest(current, points, visited)
        if nxt is None:
            break
        total += dist(points[current], points[nxt])
        visited.add(nxt)
        path.append(nxt)
        current = nxt

    total += dist(points[current], points[0])
    path.append(0)
    return TSPResult(path, total)