import random

import pytest

from tourbench.geometry import Point, path_length
from tourbench.held_karp import held_karp
from tourbench.insertion import best_insertion_position, nearest_insertion


def _random_points(count, seed):
    rng = random.Random(seed)
    return [Point(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(count)]


def test_best_position_prefers_first_on_tie():
    pts = [Point(0, 0), Point(2, 0), Point(1, 0)]
    assert best_insertion_position([0, 1, 0], 2, pts) == 1


def test_best_position_is_valid_index():
    pts = _random_points(6, 2)
    path = [0, 3, 1, 0]
    pos = best_insertion_position(path, 5, pts)
    assert 1 <= pos < len(path)
    inserted = path[:pos] + [5] + path[pos:]
    for other in range(1, len(path)):
        alt = path[:other] + [5] + path[other:]
        assert path_length(inserted, pts) <= path_length(alt, pts) + 1e-9


def test_best_position_short_path_rejected():
    with pytest.raises(ValueError):
        best_insertion_position([0], 1, [Point(0, 0), Point(1, 1)])


def test_square_is_solved_optimally():
    pts = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
    assert nearest_insertion(pts).total_cost == pytest.approx(4.0)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_closed_permutation_and_cost(seed):
    pts = _random_points(9, seed)
    result = nearest_insertion(pts)
    assert result.path[0] == result.path[-1] == 0
    assert sorted(result.path[:-1]) == list(range(len(pts)))
    assert result.total_cost == pytest.approx(path_length(result.path, pts))
    assert result.total_cost >= held_karp(pts).total_cost - 1e-9


def test_two_points():
    pts = [Point(0, 0), Point(3, 4)]
    result = nearest_insertion(pts)
    assert result.path == [0, 1, 0]


def test_single_point_rejected():
    with pytest.raises(ValueError):
        nearest_insertion([Point(0, 0)])