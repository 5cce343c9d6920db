import random

import pytest

from tourbench.geometry import Point, path_length
from tourbench.greedy import find_nearest, greedy

LINE = [Point(0, 0), Point(10, 0), Point(1, 0), Point(2, 0)]


def _random_points(count, seed):
    rng = random.Random(seed)
    return [Point(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(count)]


def test_find_nearest_skips_visited():
    assert find_nearest(0, LINE, {0}) == 2


def test_find_nearest_all_visited():
    assert find_nearest(1, LINE, {0, 1, 2, 3}) is None


def test_find_nearest_result_is_unvisited_and_closest():
    pts = _random_points(10, 3)
    visited = {0, 4, 7}
    best = find_nearest(0, pts, visited)
    assert best not in visited
    for i, p in enumerate(pts):
        if i not in visited:
            assert abs(pts[0].x - pts[best].x) ** 2 + abs(pts[0].y - pts[best].y) ** 2 <= (
                (pts[0].x - p.x) ** 2 + (pts[0].y - p.y) ** 2
            ) + 1e-9


def test_greedy_on_line():
    assert greedy(LINE).path == [0, 2, 3, 1, 0]


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_greedy_closed_permutation_and_cost(seed):
    pts = _random_points(20, seed)
    result = greedy(pts)
    assert result.path[0] == result.path[-1] == 0
    assert sorted(result.path[:-1]) == list(range(len(pts)))
    assert result.total_cost == pytest.approx(path_length(result.path, pts))


def test_greedy_single_point():
    result = greedy([Point(5, 5)])
    assert result.path == [0, 0]
    assert result.total_cost == 0


def test_greedy_empty_rejected():
    with pytest.raises(ValueError):
        greedy([])