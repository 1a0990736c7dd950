import math

import pytest

from tspsolve.utils import (
    City,
    Individual,
    compute_total_distance,
    euclidean_distance,
    generate_cities,
    order_crossover,
    shuffle_tour,
    swap_mutation,
    tournament_selection,
    two_opt,
)


@pytest.fixture
def square():
    return [City(0.0, 0.0), City(1.0, 0.0), City(1.0, 1.0), City(0.0, 1.0)]


def test_euclidean_distance_three_four_five():
    assert euclidean_distance(City(0.0, 0.0), City(3.0, 4.0)) == pytest.approx(5.0)


def test_euclidean_distance_is_symmetric():
    a, b = City(2.5, -1.0), City(-7.0, 4.25)
    assert euclidean_distance(a, b) == euclidean_distance(b, a)


def test_total_distance_of_square(square):
    assert compute_total_distance([0, 1, 2, 3], square) == pytest.approx(4.0)


def test_total_distance_is_rotation_invariant():
    cities = generate_cities(12, 7)
    tour = list(range(12))
    rotated = tour[5:] + tour[:5]
    assert compute_total_distance(tour, cities) == pytest.approx(
        compute_total_distance(rotated, cities)
    )


def test_total_distance_of_empty_tour_raises(square):
    with pytest.raises(ValueError):
        compute_total_distance([], square)


def test_generate_cities_is_reproducible():
    assert generate_cities(20, 121) == generate_cities(20, 121)
    assert generate_cities(20, 121) != generate_cities(20, 122)


def test_generate_cities_range_and_count():
    cities = generate_cities(50, 3)
    assert len(cities) == 50
    assert all(0.0 <= c.x < 1000.0 and 0.0 <= c.y < 1000.0 for c in cities)


def test_shuffle_tour_keeps_permutation():
    tour = list(range(30))
    shuffle_tour(tour)
    assert sorted(tour) == list(range(30))


def test_two_opt_untangles_square(square):
    assert two_opt([0, 2, 1, 3], square) == [0, 1, 2, 3]


def test_two_opt_never_worsens_and_keeps_permutation():
    cities = generate_cities(25, 11)
    tour = list(range(25))
    refined = two_opt(tour, cities)
    assert sorted(refined) == tour
    assert compute_total_distance(refined, cities) <= compute_total_distance(tour, cities) + 1e-9


def test_two_opt_rejects_tiny_tours(square):
    with pytest.raises(ValueError):
        two_opt([0], square)


def test_individual_fitness_and_distance(square):
    ind = Individual.from_tour([0, 2, 1, 3], square)
    expected = compute_total_distance([0, 2, 1, 3], square)
    assert ind.distance() == pytest.approx(expected)
    assert ind.fitness == pytest.approx(1.0 / expected)
    assert ind.tour == [0, 2, 1, 3]


def test_individual_with_zero_length_tour():
    cities = [City(1.0, 1.0), City(1.0, 1.0)]
    ind = Individual.from_tour([0, 1], cities)
    assert ind.fitness == math.inf
    assert ind.distance() == 0.0


def test_swap_mutation_keeps_permutation():
    tour = list(range(15))
    for _ in range(50):
        swap_mutation(tour)
    assert sorted(tour) == list(range(15))


def test_swap_mutation_empty_raises():
    with pytest.raises(ValueError):
        swap_mutation([])


def test_order_crossover_produces_permutation():
    p1 = list(range(20))
    p2 = p1[::-1]
    for _ in range(50):
        child = order_crossover(p1, p2)
        assert sorted(child) == p1


def test_order_crossover_identical_parents():
    parent = [4, 1, 3, 0, 2]
    assert order_crossover(parent, parent) == parent


def test_tournament_selection_single_member(square):
    only = Individual.from_tour([0, 1, 2, 3], square)
    assert tournament_selection([only], 5) is only


def test_tournament_selection_returns_member(square):
    population = [Individual.from_tour(t, square) for t in ([0, 1, 2, 3], [0, 2, 1, 3])]
    chosen = tournament_selection(population, 3)
    assert any(chosen is ind for ind in population)


def test_tournament_selection_zero_size_raises(square):
    with pytest.raises(ValueError):
        tournament_selection([Individual.from_tour([0, 1, 2, 3], square)], 0)