"""Exact tour search by Held-Karp dynamic programming over subsets."""

from __future__ import annotations

import math
from collections.abc import Sequence

from tourbench.geometry import Point, TSPResult, dist


def held_karp(points: Sequence[Point]) -> TSPResult:
    """Return an optimal closed tour starting and ending at city 0.

    Runs in O(n^2 * 2^n) time and O(n * 2^n) memory.
    """
    n = len(points)
    if n == 0:
        raise ValueError("held_karp needs at least one point")
    if n == 1:
        return TSPResult([0, 0], 0.0)

    d = [[dist(a, b) for b in points] for a in points]
    full = 1 << n
    cost = [[math.inf] * n for _ in range(full)]
    parent: list[list[int | None]] = [[None] * n for _ in range(full)]
    cost[1][0] = 0.0

    for mask in range(1, full):
        row = cost[mask]
        for u in range(n):
            if not mask >> u & 1:
                continue
            base = row[u]
            if base == math.inf:
                continue
            du = d[u]
            for v in range(n):
                if mask >> v & 1:
                    continue
                nxt = mask | 1 << v
                candidate = base + du[v]
                if candidate < cost[nxt][v]:
                    cost[nxt][v] = candidate
                    parent[nxt][v] = u

    last_row = cost[full - 1]
    min_cost = math.inf
    last_city: int | None = None
    for u in range(1, n):
        total = last_row[u] + d[u][0]
        if total < min_cost:
            min_cost = total
            last_city = u

    path: list[int] = []
    mask = full - 1
    curr = last_city
    while curr is not None:
        path.append(curr)
        prev = parent[mask][curr]
        mask ^= 1 << curr
        curr = prev
    path.reverse()
    path.append(0)
    return TSPResult(path, min_cost)