"""Shared building blocks: cities, tour costs, 2-opt refinement and GA operators."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

COORDINATE_RANGE = 1000.0


@dataclass(frozen=True)
class City:
    """A point in the plane."""

    x: float
    y: float


def generate_cities(n: int, seed: int) -> list[City]:
    """Return ``n`` cities with coordinates in ``[0, 1000)``, reproducible from ``seed``."""
    rng = random.Random(seed)
    return [
        City(rng.random() * COORDINATE_RANGE, rng.random() * COORDINATE_RANGE)
        for _ in range(n)
    ]


def euclidean_distance(a: City, b: City) -> float:
    """Straight-line distance between two cities."""
    return math.hypot(a.x - b.x, a.y - b.y)


def compute_total_distance(tour: Sequence[int], cities: Sequence[City]) -> float:
    """Length of the closed tour, including the edge back to the start."""
    if not tour:
        raise ValueError("cannot measure an empty tour")
    return sum(
        euclidean_distance(cities[a], cities[b])
        for a, b in zip(tour, [*tour[1:], tour[0]])
    )


def shuffle_tour(tour: list[int]) -> None:
    """Shuffle a tour in place."""
    random.shuffle(tour)


def two_opt(tour: Sequence[int], cities: Sequence[City]) -> list[int]:
    """First-improvement 2-opt that leaves the final edge of the tour untouched."""
    if len(tour) < 2:
        raise ValueError("2-opt refinement needs at least two cities")
    route = list(tour)
    n = len(route)
    improved = True
    while improved:
        improved = False
        for i in range(1, n - 2):
            for j in range(i + 1, n - 1):
                a, b, c, d = route[i - 1], route[i], route[j], route[(j + 1) % n]
                before = euclidean_distance(cities[a], cities[b]) + euclidean_distance(
                    cities[c], cities[d]
                )
                after = euclidean_distance(cities[a], cities[c]) + euclidean_distance(
                    cities[b], cities[d]
                )
                if after < before:
                    route[i : j + 1] = route[i : j + 1][::-1]
                    improved = True
    return route


@dataclass
class Individual:
    """A candidate tour whose fitness is the inverse of its length."""

    tour: list[int]
    fitness: float

    @classmethod
    def from_tour(cls, tour: Sequence[int], cities: Sequence[City]) -> Individual:
        """Build an individual, scoring the tour against ``cities``."""
        distance = compute_total_distance(tour, cities)
        fitness = math.inf if distance == 0 else 1.0 / distance
        return cls(list(tour), fitness)

    def distance(self) -> float:
        """Length of the tour."""
        return 1.0 / self.fitness


def swap_mutation(tour: list[int]) -> None:
    """Swap two randomly chosen positions of the tour in place."""
    i = random.randrange(len(tour))
    j = random.randrange(len(tour))
    tour[i], tour[j] = tour[j], tour[i]


def order_crossover(parent1: Sequence[int], parent2: Sequence[int]) -> list[int]:
    """Order crossover (OX): keep a slice of ``parent1``, fill the rest in ``parent2`` order."""
    size = len(parent1)
    start, end = sorted((random.randrange(size), random.randrange(size)))
    segment = list(parent1[start : end + 1])
    used = set(segment)
    filler = iter(city for city in parent2 if city not in used)
    head = [next(filler) for _ in range(start)]
    tail = [next(filler) for _ in range(size - end - 1)]
    return head + segment + tail


def tournament_selection(population: Sequence[Individual], k: int) -> Individual:
    """Draw ``k`` individuals with replacement and return the fittest."""
    if k < 1:
        raise ValueError("tournament size must be at least 1")
    if not population:
        raise ValueError("cannot select from an empty population")
    best: Individual | None = None
    for candidate in (random.choice(population) for _ in range(k)):
        if best is None or candidate.fitness >= best.fitness:
            best = candidate
    return best