"""Simulated annealing over random segment reversals of a tour."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from tourbench.geometry import Point, TSPResult, dist, path_length

INITIAL_TEMP = 1000.0
MIN_TEMP = 1e-6
COOLING = 0.995
ITERATIONS_PER_TEMP = 100


def closed_tour_cost(path: Sequence[int], points: Sequence[Point]) -> float:
    """Length of ``path`` plus the edge from its last city back to its first."""
    return path_length(path, points) + dist(points[path[-1]], points[path[0]])


def create_initial_path(n: int, rng: random.Random | None = None) -> list[int]:
    """Random closed tour over ``n`` cities that starts and ends at city 0."""
    if n < 1:
        raise ValueError("a tour needs at least one city")
    rng = rng if rng is not None else random.Random()
    middle = list(range(1, n))
    rng.shuffle(middle)
    return [0, *middle, 0]


def _pick_segment(length: int, rng: random.Random) -> tuple[int, int]:
    if length < 3:
        raise ValueError("a neighbour needs a path of at least three entries")
    i = 1 + rng.randrange(length - 2)
    j = 1 + rng.randrange(length - 2)
    return (i, j) if i <= j else (j, i)


def get_neighbor(path: Sequence[int], rng: random.Random | None = None) -> list[int]:
    """Copy of ``path`` with a random inner segment reversed; ends stay fixed."""
    rng = rng if rng is not None else random.Random()
    i, j = _pick_segment(len(path), rng)
    new_path = list(path)
    new_path[i : j + 1] = new_path[i : j + 1][::-1]
    return new_path


def simulated_annealing(
    points: Sequence[Point], rng: random.Random | None = None
) -> TSPResult:
    """Anneal a random closed tour, returning the best tour seen."""
    n = len(points)
    if n == 0:
        raise ValueError("simulated annealing needs at least one point")
    rng = rng if rng is not None else random.Random()
    current = create_initial_path(n, rng)
    if n == 1:
        return TSPResult(current, closed_tour_cost(current, points))

    current_cost = closed_tour_cost(current, points)
    best, best_cost = list(current), current_cost
    temp = INITIAL_TEMP

    while temp > MIN_TEMP:
        for _ in range(ITERATIONS_PER_TEMP):
            i, j = _pick_segment(len(current), rng)
            a, b = points[current[i - 1]], points[current[i]]
            c, e = points[current[j]], points[current[j + 1]]
            delta = dist(a, c) + dist(b, e) - dist(a, b) - dist(c, e)
            if delta < 0 or math.exp(-delta / temp) > rng.random():
                current[i : j + 1] = current[i : j + 1][::-1]
                current_cost += delta
                if current_cost < best_cost:
                    best, best_cost = list(current), current_cost
        temp *= COOLING

    return TSPResult(best, closed_tour_cost(best, points))