"""Multi-start 2-opt whose starts are shuffled tours or cheapest-insertion routes."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from tspsolve.multistart import WORKERS, lazy_swap_descent
from tspsolve.utils import City, euclidean_distance


def _insertion_cost(route: Sequence[int], position: int, city: int, cities: Sequence[City]) -> float:
    """Extra length of the open path when ``city`` is placed before ``route[position]``."""
    here = cities[city]
    if position == 0:
        return euclidean_distance(here, cities[route[0]])
    if position == len(route):
        return euclidean_distance(cities[route[-1]], here)
    prev, nxt = cities[route[position - 1]], cities[route[position]]
    return (
        euclidean_distance(prev, here)
        + euclidean_distance(here, nxt)
        - euclidean_distance(prev, nxt)
    )


def insertion_route(remain: Sequence[int], cities: Sequence[City]) -> list[int]:
    """Build a path by cheapest insertion of ``remain`` in order.

    The first ``max(len(cities) // 100, 2)`` cities of ``remain`` form the seed
    path; each later city goes where it lengthens the open path the least,
    the earliest position winning ties.
    """
    if not remain:
        raise ValueError("cannot build a route from no cities")
    seed_size = max(len(cities) // 100, 2)
    route = list(remain[:seed_size])
    for city in remain[seed_size:]:
        best_position = 0
        lowest = math.inf
        for position in range(len(route) + 1):
            cost = _insertion_cost(route, position, city, cities)
            if cost < lowest:
                lowest = cost
                best_position = position
        route.insert(best_position, city)
    return route


def multi_2opt_random_insert(
    tour: Sequence[int], cities: Sequence[City]
) -> tuple[list[int], float]:
    """Lazy-swap descent from 32 starts, half of them cheapest-insertion routes; keep the best."""
    if not tour:
        raise ValueError("cannot optimise an empty tour")
    n = len(tour)
    possibilities = [(i, j) for i in range(1, n - 1) for j in range(i + 1, n)]

    def run(rng: random.Random) -> tuple[list[int], float]:
        shuffled = list(range(n))
        rng.shuffle(shuffled)
        start = shuffled if rng.random() < 0.5 else insertion_route(shuffled, cities)
        return lazy_swap_descent(start, cities, possibilities, rng)

    rngs = [random.Random(random.getrandbits(64)) for _ in range(WORKERS)]
    return min((run(rng) for rng in rngs), key=lambda result: result[1])