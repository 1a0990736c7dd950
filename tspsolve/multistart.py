"""Multi-start 2-opt: many randomised starts refined by sampled swaps, keeping the best."""

from __future__ import annotations

import random
from collections.abc import Sequence

from tspsolve.utils import City, compute_total_distance, euclidean_distance

WORKERS = 32
SAMPLING_ROUNDS = 32
MIN_SWAP_GAIN = 10.0
MIN_ROUND_GAIN = 1.0


def _candidate_pairs(n: int) -> list[tuple[int, int]]:
    """All ``(i, j)`` segment bounds with ``1 <= i < j < n``."""
    return [(i, j) for i in range(1, n - 1) for j in range(i + 1, n)]


def _reverse(route: list[int], i: int, j: int) -> None:
    route[i : j + 1] = route[i : j + 1][::-1]


def _worker_rngs() -> list[random.Random]:
    """One independent generator per start, drawn from the global generator."""
    return [random.Random(random.getrandbits(64)) for _ in range(WORKERS)]


def _check(tour: Sequence[int]) -> int:
    if not tour:
        raise ValueError("cannot optimise an empty tour")
    return len(tour)


def nearest_neighbour_route(start_point: int, cities: Sequence[City]) -> list[int]:
    """Greedy route from ``start_point``, always moving to the closest unvisited city."""
    n = len(cities)
    if not 0 <= start_point < n:
        raise ValueError(f"start point {start_point} is not a city index")
    route = [start_point]
    unvisited = [index for index in range(n) if index != start_point]
    previous = start_point
    while unvisited:
        nearest = min(
            unvisited,
            key=lambda index: euclidean_distance(cities[previous], cities[index]),
        )
        unvisited.remove(nearest)
        route.append(nearest)
        previous = nearest
    return route


def lazy_swap_descent(
    route: Sequence[int],
    cities: Sequence[City],
    possibilities: Sequence[tuple[int, int]],
    rng: random.Random,
) -> tuple[list[int], float]:
    """Apply batches of disjoint, sampled improving reversals until a round gains under 1.

    Each round samples half of ``possibilities``, keeps reversals that gain more
    than 10, and applies the best ones whose endpoints do not touch. The cost
    returned is the one recorded before the final round that failed to gain.
    """
    route = list(route)
    n = len(route)
    sample_size = len(possibilities) // 2
    distance = compute_total_distance(route, cities)
    while True:
        sampled = rng.sample(list(possibilities), min(sample_size, len(possibilities)))
        gains: list[tuple[int, int, float]] = []
        for i, j in sampled:
            if i == 0 or j + 1 >= n:
                continue
            before = euclidean_distance(
                cities[route[i - 1]], cities[route[i]]
            ) + euclidean_distance(cities[route[j]], cities[route[(j + 1) % n]])
            after = euclidean_distance(
                cities[route[i - 1]], cities[route[j]]
            ) + euclidean_distance(cities[route[i]], cities[route[(j + 1) % n]])
            if before - after > MIN_SWAP_GAIN:
                gains.append((i, j, before - after))

        gains.sort(key=lambda entry: entry[2], reverse=True)
        used = [False] * n
        selected: list[tuple[int, int]] = []
        for i, j, _ in gains:
            ends = (i - 1, i, j, (j + 1) % n)
            if any(used[position] for position in ends):
                continue
            selected.append((i, j))
            for position in ends:
                used[position] = True

        for i, j in selected:
            _reverse(route, i, j)

        new_distance = compute_total_distance(route, cities)
        if distance - new_distance < MIN_ROUND_GAIN:
            break
        distance = new_distance
    return route, distance


def two_opt_par_ver2(tour: Sequence[int], cities: Sequence[City]) -> tuple[list[int], float]:
    """From 32 shuffled starts, try sampled reversals and keep those gaining more than 1."""
    n = _check(tour)
    possibilities = _candidate_pairs(n)
    sample_size = min(n * 2, len(possibilities))

    def run(rng: random.Random) -> tuple[list[int], float]:
        route = list(range(n))
        rng.shuffle(route)
        distance = compute_total_distance(route, cities)
        for _ in range(SAMPLING_ROUNDS):
            for i, j in rng.sample(possibilities, sample_size):
                trial = list(route)
                _reverse(trial, i, j)
                trial_distance = compute_total_distance(trial, cities)
                if distance - trial_distance > MIN_ROUND_GAIN:
                    route, distance = trial, trial_distance
        return route, distance

    return min((run(rng) for rng in _worker_rngs()), key=lambda result: result[1])


def multi_2opt_optimized1(tour: Sequence[int], cities: Sequence[City]) -> tuple[list[int], float]:
    """Lazy-swap descent from 32 shuffled starts; return the cheapest result."""
    n = _check(tour)
    possibilities = _candidate_pairs(n)

    def run(rng: random.Random) -> tuple[list[int], float]:
        route = list(range(n))
        rng.shuffle(route)
        return lazy_swap_descent(route, cities, possibilities, rng)

    return min((run(rng) for rng in _worker_rngs()), key=lambda result: result[1])


def multi_2opt_optimized2_v2(
    tour: Sequence[int], cities: Sequence[City]
) -> tuple[list[int], float]:
    """Like :func:`multi_2opt_optimized1`, but half the starts are nearest-neighbour routes."""
    n = _check(tour)
    possibilities = _candidate_pairs(n)

    def run(rng: random.Random) -> tuple[list[int], float]:
        if rng.random() < 0.5:
            route = list(range(n))
            rng.shuffle(route)
        else:
            route = nearest_neighbour_route(rng.randrange(n), cities)
        return lazy_swap_descent(route, cities, possibilities, rng)

    return min((run(rng) for rng in _worker_rngs()), key=lambda result: result[1])