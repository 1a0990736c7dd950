import random

import pytest

from tspsolve.insertion import insertion_route, multi_2opt_random_insert
from tspsolve.utils import City, compute_total_distance, generate_cities


def _line(n):
    return [City(float(i), 0.0) for i in range(n)]


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_insertion_route_is_permutation(seed):
    cities = generate_cities(30, seed)
    remain = list(range(30))
    random.Random(seed).shuffle(remain)
    route = insertion_route(remain, cities)
    assert sorted(route) == list(range(30))


@pytest.mark.parametrize("seed", [0, 7, 11])
def test_insertion_route_on_a_line_is_monotone(seed):
    cities = _line(15)
    remain = list(range(15))
    random.Random(seed).shuffle(remain)
    route = insertion_route(remain, cities)
    assert route in (list(range(15)), list(range(14, -1, -1)))


def test_insertion_route_keeps_seed_order():
    cities = _line(2)
    assert insertion_route([1, 0], cities) == [1, 0]


def test_insertion_route_rejects_empty():
    with pytest.raises(ValueError):
        insertion_route([], _line(3))


def test_random_insert_returns_permutation():
    random.seed(5)
    cities = generate_cities(12, 3)
    route, cost = multi_2opt_random_insert(list(range(12)), cities)
    assert sorted(route) == list(range(12))
    assert cost > 0


def test_random_insert_three_cities_cost_matches_route():
    random.seed(9)
    cities = generate_cities(3, 42)
    route, cost = multi_2opt_random_insert([0, 1, 2], cities)
    assert sorted(route) == [0, 1, 2]
    assert cost == pytest.approx(compute_total_distance(route, cities))


def test_random_insert_rejects_empty_tour():
    with pytest.raises(ValueError):
        multi_2opt_random_insert([], _line(3))