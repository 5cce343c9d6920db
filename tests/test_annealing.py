import random

import pytest

from tourbench.annealing import (
    closed_tour_cost,
    create_initial_path,
    get_neighbor,
    simulated_annealing,
)
from tourbench.geometry import Point
from tourbench.held_karp import held_karp


def _random_points(count, seed):
    rng = random.Random(seed)
    return [Point(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(count)]


def test_closed_cost_same_for_open_and_closed_form():
    pts = _random_points(4, 1)
    assert closed_tour_cost([0, 2, 1, 3], pts) == pytest.approx(
        closed_tour_cost([0, 2, 1, 3, 0], pts)
    )


def test_closed_cost_rotation_invariant():
    pts = _random_points(5, 2)
    assert closed_tour_cost([0, 1, 2, 3, 4], pts) == pytest.approx(
        closed_tour_cost([2, 3, 4, 0, 1], pts)
    )


def test_closed_cost_of_unit_square():
    pts = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
    assert closed_tour_cost([0, 1, 2, 3], pts) == pytest.approx(4.0)


@pytest.mark.parametrize("n", [2, 5, 17])
def test_initial_path_is_closed_permutation(n):
    path = create_initial_path(n, random.Random(n))
    assert path[0] == path[-1] == 0
    assert sorted(path[:-1]) == list(range(n))


def test_initial_path_reproducible_with_seed():
    first = create_initial_path(30, random.Random(5))
    second = create_initial_path(30, random.Random(5))
    assert first == second
    assert len(first) == 31
    assert sorted(first[:-1]) == list(range(30))


def test_initial_path_rejects_zero():
    with pytest.raises(ValueError):
        create_initial_path(0)


def test_neighbor_keeps_ends_and_cities():
    rng = random.Random(11)
    path = create_initial_path(12, rng)
    original = list(path)
    for _ in range(50):
        nxt = get_neighbor(path, rng)
        assert nxt[0] == path[0] and nxt[-1] == path[-1]
        assert sorted(nxt) == sorted(path)
    assert path == original


def test_neighbor_rejects_short_path():
    with pytest.raises(ValueError):
        get_neighbor([0, 0], random.Random(1))


def test_square_reaches_optimum():
    pts = [Point(0, 0), Point(1, 1), Point(1, 0), Point(0, 1)]
    result = simulated_annealing(pts, random.Random(3))
    assert result.total_cost == pytest.approx(4.0)


@pytest.mark.parametrize("seed", [1, 2])
def test_result_is_consistent_tour(seed):
    pts = _random_points(8, seed)
    result = simulated_annealing(pts, random.Random(seed))
    assert result.path[0] == result.path[-1] == 0
    assert sorted(result.path[:-1]) == list(range(len(pts)))
    assert result.total_cost == pytest.approx(closed_tour_cost(result.path, pts))
    assert result.total_cost >= held_karp(pts).total_cost - 1e-9


def test_reproducible_with_seeded_rng():
    pts = _random_points(10, 4)
    first = simulated_annealing(pts, random.Random(8))
    second = simulated_annealing(pts, random.Random(8))
    assert first.path == second.path
    assert first.total_cost == second.total_cost


def test_single_point():
    result = simulated_annealing([Point(2, 2)], random.Random(0))
    assert result.path == [0, 0]
    assert result.total_cost == 0.0


def test_empty_rejected():
    with pytest.raises(ValueError):
        simulated_annealing([])