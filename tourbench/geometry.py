"""Planar points, tour results and distance helpers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Point:
    """A city location in the plane."""

    x: float
    y: float


@dataclass(slots=True)
class TSPResult:
    """A tour given as city indices together with its total length."""

    path: list[int] = field(default_factory=list)
    total_cost: float = 0.0


def dist(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def path_length(path: Sequence[int], points: Sequence[Point]) -> float:
    """Sum of the distances between consecutive cities of ``path``."""
    return sum(dist(points[u], points[v]) for u, v in zip(path, path[1:]))