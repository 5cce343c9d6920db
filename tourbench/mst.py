"""Minimum spanning tree tours: the classic 2-approximation for metric TSP."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from tourbench.geometry import Point, TSPResult, dist, path_length


def build_mst(points: Sequence[Point]) -> list[list[int]]:
    """Build a minimum spanning tree with Prim's algorithm, rooted at city 0.

    Returns the tree as an adjacency list.
    """
    n = len(points)
    min_dist = [math.inf] * n
    parent: list[int | None] = [None] * n
    in_tree = [False] * n
    if n:
        min_dist[0] = 0.0

    for _ in range(n):
        u = min(
            (j for j in range(n) if not in_tree[j]),
            key=min_dist.__getitem__,
        )
        in_tree[u] = True
        origin = points[u]
        for v, point in enumerate(points):
            if in_tree[v]:
                continue
            d = dist(origin, point)
            if d < min_dist[v]:
                min_dist[v] = d
                parent[v] = u

    adj: list[list[int]] = [[] for _ in range(n)]
    for child in range(1, n):
        par = parent[child]
        if par is None:
            continue
        adj[child].append(par)
        adj[par].append(child)
    return adj


def euler_tour(adj: Sequence[Sequence[int]], start: int = 0) -> list[int]:
    """Walk every edge of an undirected graph once from ``start``.

    Vertices are listed in the order of the reversed post-order of a
    depth-first traversal that never reuses an edge.
    """
    used: set[tuple[int, int]] = set()
    post_order: list[int] = []
    stack = [(start, iter(adj[start]))]
    while stack:
        u, neighbours = stack[-1]
        for v in neighbours:
            edge = (u, v) if u < v else (v, u)
            if edge in used:
                continue
            used.add(edge)
            stack.append((v, iter(adj[v])))
            break
        else:
            stack.pop()
            post_order.append(u)
    post_order.reverse()
    return post_order


def shortcut(path: Iterable[int]) -> list[int]:
    """Keep only the first visit of each city, preserving order."""
    return list(dict.fromkeys(path))


def mst_order(points: Sequence[Point]) -> list[int]:
    """Closed tour obtained by shortcutting an Euler walk of the MST."""
    if not points:
        raise ValueError("an MST tour needs at least one point")
    walk = euler_tour(build_mst(points), 0)
    order = shortcut(walk)
    order.append(walk[0])
    return order


def mst_2approx(points: Sequence[Point]) -> TSPResult:
    """Tour at most twice the optimum length, built from the MST."""
    order = mst_order(points)
    return TSPResult(order, path_length(order, points))