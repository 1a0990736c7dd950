"""Best-improvement 2-opt variants that apply one or several swaps per round."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from tspsolve.utils import City, compute_total_distance, euclidean_distance

logger = logging.getLogger(__name__)

MAX_ROUNDS = 1000
DELTA_THRESHOLD = 1e-6


def _improving_swaps(
    route: Sequence[int], cities: Sequence[City], threshold: float
) -> Iterator[tuple[float, int, int]]:
    """Yield ``(gain, i, j)`` for every reversal whose gain exceeds ``threshold``."""
    n = len(route)
    for i in range(1, n - 1):
        for j in range(i + 1, n):
            a, b, c, d = route[i - 1], route[i], route[j], route[(j + 1) % n]
            current = euclidean_distance(cities[a], cities[b]) + euclidean_distance(
                cities[c], cities[d]
            )
            swapped = euclidean_distance(cities[a], cities[c]) + euclidean_distance(
                cities[b], cities[d]
            )
            gain = current - swapped
            if gain > threshold:
                yield gain, i, j


def _select_disjoint(
    candidates: list[tuple[float, int, int]], n: int, k: int
) -> list[tuple[int, int]]:
    """Pick up to ``k`` best non-overlapping segments, best gain first."""
    ranked = sorted(candidates, key=lambda cand: cand[0], reverse=True)
    taken = [False] * n
    chosen: list[tuple[int, int]] = []
    for _, i, j in ranked:
        if len(chosen) >= k:
            break
        if any(taken[i : j + 1]):
            continue
        chosen.append((i, j))
        taken[i : j + 1] = [True] * (j - i + 1)
    return chosen


def _rounds() -> Iterator[int]:
    """Count rounds, warning and stopping once the round limit is passed."""
    for count in range(1, MAX_ROUNDS + 2):
        if count > MAX_ROUNDS:
            logger.warning("round limit reached, stopping to avoid an endless loop")
            return
        yield count


def _check(tour: Sequence[int]) -> list[int]:
    if not tour:
        raise ValueError("cannot optimise an empty tour")
    return list(tour)


def par_prototype(tour: Sequence[int], cities: Sequence[City]) -> tuple[list[int], float]:
    """Apply the single best improving reversal each round until none is left."""
    route = _check(tour)
    for _ in _rounds():
        best = max(
            _improving_swaps(route, cities, DELTA_THRESHOLD),
            key=lambda cand: cand[0],
            default=None,
        )
        if best is None:
            break
        _, i, j = best
        route[i : j + 1] = route[i : j + 1][::-1]
    return route, compute_total_distance(route, cities)


def par_topk(tour: Sequence[int], cities: Sequence[City], k: int) -> tuple[list[int], float]:
    """Apply up to ``k`` best non-overlapping improving reversals each round."""
    route = _check(tour)
    for _ in _rounds():
        candidates = list(_improving_swaps(route, cities, DELTA_THRESHOLD))
        if not candidates:
            break
        chosen = _select_disjoint(candidates, len(route), k)
        if not chosen:
            break
        for i, j in chosen:
            route[i : j + 1] = route[i : j + 1][::-1]
    return route, compute_total_distance(route, cities)


def par_topkplus(
    tour: Sequence[int], cities: Sequence[City], k: int, delta_thresh: float
) -> tuple[list[int], float]:
    """Like :func:`par_topk`, filtering by ``delta_thresh`` and committing a round only if it helps."""
    route = _check(tour)
    for _ in _rounds():
        candidates = list(_improving_swaps(route, cities, delta_thresh))
        if not candidates:
            break
        trial = list(route)
        for i, j in _select_disjoint(candidates, len(route), k):
            trial[i : j + 1] = trial[i : j + 1][::-1]
        if compute_total_distance(trial, cities) < compute_total_distance(route, cities):
            route = trial
        else:
            break
    return route, compute_total_distance(route, cities)