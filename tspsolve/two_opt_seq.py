"""Sequential first-improvement 2-opt."""

from __future__ import annotations

from collections.abc import Sequence

from tspsolve.utils import City, compute_total_distance, euclidean_distance


def two_opt_seq(tour: Sequence[int], cities: Sequence[City]) -> tuple[list[int], float]:
    """Reverse segments while any reversal shortens the tour; return the tour and its cost."""
    if not tour:
        raise ValueError("cannot optimise an empty tour")
    route = list(tour)
    n = len(route)
    improved = True
    while improved:
        improved = False
        for i in range(1, n - 1):
            for j in range(i + 1, n):
                a, b, c, d = route[i - 1], route[i], route[j], route[(j + 1) % n]
                current = euclidean_distance(cities[a], cities[b]) + euclidean_distance(
                    cities[c], cities[d]
                )
                swapped = euclidean_distance(cities[a], cities[c]) + euclidean_distance(
                    cities[b], cities[d]
                )
                if swapped < current:
                    route[i : j + 1] = route[i : j + 1][::-1]
                    improved = True
    return route, compute_total_distance(route, cities)