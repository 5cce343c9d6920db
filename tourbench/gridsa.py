"""Grid-partitioned annealing: solve cells separately, then stitch and polish."""

from __future__ import annotations

import logging
import math
import os
import random
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor

from tourbench.annealing import simulated_annealing
from tourbench.geometry import Point, TSPResult, dist, path_length
from tourbench.mst import mst_order

GRID_CELL_LIMIT = 280
"""Largest number of cities a single grid cell may hold."""

FAST_BASE_SEED = 1234
"""Base seed for the per-worker generators of :func:`grid_sa_fast`."""

_IMPROVEMENT_EPS = 1e-9
_FINAL_TWO_OPT_PASSES = 8

_INITIAL_TEMP = 1000.0
_MIN_TEMP = 1e-6
_COOLING = 0.995
_ITERATIONS_PER_TEMP = 50

_log = logging.getLogger(__name__)


def two_opt_once(points: Sequence[Point], path: list[int]) -> bool:
    """Apply the first improving 2-opt move to ``path`` in place.

    The first and last entries stay fixed. Returns True if a move was made.
    """
    n = len(path)
    if n < 5:
        return False
    for i in range(1, n - 2):
        before, first = points[path[i - 1]], points[path[i]]
        old_left = dist(before, first)
        for k in range(i + 1, n - 1):
            last, after = points[path[k]], points[path[k + 1]]
            delta = (
                dist(before, last)
                + dist(first, after)
                - old_left
                - dist(last, after)
            )
            if delta < -_IMPROVEMENT_EPS:
                path[i : k + 1] = path[i : k + 1][::-1]
                return True
    return False


def two_opt_full(points: Sequence[Point], path: list[int], max_iter: int = 6) -> None:
    """Repeat :func:`two_opt_once` up to ``max_iter`` times or until no move helps."""
    for _ in range(max_iter):
        if not two_opt_once(points, path):
            break


def anneal_tour(
    points: Sequence[Point],
    seed: Sequence[int],
    rng: random.Random | None = None,
) -> list[int]:
    """Improve the closed tour ``seed`` by simulated annealing.

    Moves reverse a random half-open inner segment; the end points never
    move. Tours of four entries or fewer are returned unchanged.
    """
    current = list(seed)
    if len(current) <= 4:
        return current
    rng = rng if rng is not None else random.Random()

    current_len = path_length(current, points)
    best, best_len = list(current), current_len
    span = len(current) - 2
    temp = _INITIAL_TEMP

    while temp > _MIN_TEMP:
        for _ in range(_ITERATIONS_PER_TEMP):
            a = 1 + rng.randrange(span)
            b = 1 + rng.randrange(span)
            if a > b:
                a, b = b, a
            if a == b:
                delta = 0.0
            else:
                left, first = points[current[a - 1]], points[current[a]]
                last, right = points[current[b - 1]], points[current[b]]
                delta = (
                    dist(left, last)
                    + dist(first, right)
                    - dist(left, first)
                    - dist(last, right)
                )
            if delta < 0 or rng.random() < math.exp(-delta / temp):
                current[a:b] = current[a:b][::-1]
                current_len += delta
                if current_len < best_len:
                    best, best_len = list(current), current_len
        temp *= _COOLING

    return best


def split_grids(
    points: Sequence[Point], limit: int = GRID_CELL_LIMIT
) -> list[list[int]]:
    """Split cities into quadtree cells of at most ``limit`` cities each.

    Cells come out depth first, quadrants in the order lower-left,
    lower-right, upper-left, upper-right. Empty cells are dropped. A cell
    whose bounding box can no longer be halved is kept whole.
    """
    if limit < 1:
        raise ValueError("cell limit must be at least 1")
    if not points:
        return []

    cells: list[list[int]] = []

    def subdivide(
        idx: list[int], min_x: float, min_y: float, max_x: float, max_y: float
    ) -> None:
        if not idx:
            return
        if len(idx) <= limit:
            cells.append(idx)
            return
        mid_x = (min_x + max_x) * 0.5
        mid_y = (min_y + max_y) * 0.5
        if not (min_x < mid_x < max_x or min_y < mid_y < max_y):
            cells.append(idx)
            return

        quadrants: list[list[int]] = [[], [], [], []]
        for v in idx:
            right = points[v].x >= mid_x
            top = points[v].y >= mid_y
            quadrants[(2 if top else 0) + (1 if right else 0)].append(v)

        subdivide(quadrants[0], min_x, min_y, mid_x, mid_y)
        subdivide(quadrants[1], mid_x, min_y, max_x, mid_y)
        subdivide(quadrants[2], min_x, mid_y, mid_x, max_y)
        subdivide(quadrants[3], mid_x, mid_y, max_x, max_y)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    subdivide(list(range(len(points))), min(xs), min(ys), max(xs), max(ys))
    return cells


def stitch_tours(
    order: Sequence[int],
    cell_ids: Sequence[int],
    sub_tours: Sequence[Sequence[int]],
) -> list[int]:
    """Concatenate cell tours in the visiting ``order`` of their cells.

    ``order`` holds indices into ``cell_ids``, which name entries of
    ``sub_tours``. A city shared at a junction is kept once, and the
    closing city of a closed sub-tour is dropped when it is appended.
    """
    total: list[int] = []
    for meta in order:
        sub = sub_tours[cell_ids[meta]]
        if not sub:
            continue
        if not total:
            total = list(sub)
            continue
        if total[-1] == sub[0]:
            total.pop()
        closed = len(sub) >= 2 and sub[0] == sub[-1]
        total.extend(sub[:-1] if closed else sub)
    return total


def _cell_coords(points: Sequence[Point], cell: Sequence[int]) -> list[tuple[float, float]]:
    return [(points[v].x, points[v].y) for v in cell]


def _anneal_local(
    coords: Sequence[tuple[float, float]], rng: random.Random
) -> list[int]:
    local_points = [Point(x, y) for x, y in coords]
    seed = [*range(len(local_points)), 0]
    return anneal_tour(local_points, seed, rng)


def _anneal_cell(task: tuple[list[tuple[float, float]], int]) -> list[int]:
    coords, rng_seed = task
    return _anneal_local(coords, random.Random(rng_seed))


def _assemble(
    points: Sequence[Point], cells: Sequence[Sequence[int]], sub_tours: Sequence[list[int]]
) -> TSPResult:
    cell_ids = [g for g, sub in enumerate(sub_tours) if sub]
    centroids = [
        Point(
            sum(points[v].x for v in cells[g]) / len(cells[g]),
            sum(points[v].y for v in cells[g]) / len(cells[g]),
        )
        for g in cell_ids
    ]
    order = mst_order(centroids)
    total = stitch_tours(order, cell_ids, sub_tours)
    if total and total[0] != total[-1]:
        total.append(total[0])
    two_opt_full(points, total, _FINAL_TWO_OPT_PASSES)
    return TSPResult(total, path_length(total, points))


def grid_sa(
    points: Sequence[Point],
    rng: random.Random | None = None,
) -> TSPResult:
    """Anneal each grid cell, order cells by an MST tour, stitch, then 2-opt.

    Inputs of at most ``GRID_CELL_LIMIT`` cities are handed to plain
    simulated annealing instead.
    """
    if len(points) <= GRID_CELL_LIMIT:
        return simulated_annealing(points, rng)
    rng = rng if rng is not None else random.Random()

    cells = split_grids(points, GRID_CELL_LIMIT)
    _log.info("Grid count: %d", len(cells))

    sub_tours: list[list[int]] = []
    for cell in cells:
        if len(cell) == 1:
            sub_tours.append([cell[0]])
            continue
        local = _anneal_local(_cell_coords(points, cell), rng)
        sub_tours.append([cell[i] for i in local])
    return _assemble(points, cells, sub_tours)


def grid_sa_fast(
    points: Sequence[Point],
    workers: int | None = None,
) -> TSPResult:
    """Like :func:`grid_sa`, annealing the cells in parallel processes.

    Cell ``g`` is annealed with a generator seeded by
    ``FAST_BASE_SEED + g % workers``, so results are reproducible for a
    given number of workers.
    """
    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError("workers must be at least 1")
    if len(points) <= GRID_CELL_LIMIT:
        return simulated_annealing(points, random.Random(FAST_BASE_SEED))

    cells = split_grids(points, GRID_CELL_LIMIT)
    _log.info("Grid count: %d", len(cells))

    sub_tours: list[list[int]] = [[cell[0]] if len(cell) == 1 else [] for cell in cells]
    pending = [g for g, cell in enumerate(cells) if len(cell) > 1]
    tasks = [
        (_cell_coords(points, cells[g]), FAST_BASE_SEED + g % workers) for g in pending
    ]

    if workers == 1 or len(tasks) <= 1:
        locals_ = [_anneal_cell(task) for task in tasks]
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            locals_ = list(pool.map(_anneal_cell, tasks))

    for g, local in zip(pending, locals_):
        sub_tours[g] = [cells[g][i] for i in local]
    return _assemble(points, cells, sub_tours)