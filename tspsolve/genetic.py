"""Genetic algorithms for the TSP with elitism, early stopping and 2-opt refinement."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence
from concurrent.futures import Executor, ThreadPoolExecutor

from tspsolve.utils import (
    City,
    Individual,
    order_crossover,
    swap_mutation,
    tournament_selection,
    two_opt,
)

logger = logging.getLogger(__name__)

TOURNAMENT_SIZE = 5
EARLY_STOP_PATIENCE = 100
BASELINE_ELITISM = 5
REPORT_EVERY = 50


def _random_population(cities: Sequence[City], size: int) -> list[Individual]:
    population = []
    for _ in range(size):
        tour = list(range(len(cities)))
        random.shuffle(tour)
        population.append(Individual.from_tour(tour, cities))
    return population


def _child(population: Sequence[Individual], cities: Sequence[City], mutation_rate: float) -> Individual:
    parent1 = tournament_selection(population, TOURNAMENT_SIZE)
    parent2 = tournament_selection(population, TOURNAMENT_SIZE)
    tour = order_crossover(parent1.tour, parent2.tour)
    if random.random() < mutation_rate:
        swap_mutation(tour)
    return Individual.from_tour(tour, cities)


def _refined(individual: Individual, cities: Sequence[City]) -> Individual:
    return Individual.from_tour(two_opt(individual.tour, cities), cities)


def _evolve(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
    elitism_k: int,
    refine_start: int | None,
    refine_every: int,
    top_n: int,
    executor: Executor | None,
) -> Individual:
    if population_size < 1:
        raise ValueError("population size must be at least 1")
    if refine_start is not None and refine_every < 1:
        raise ValueError("refine_every must be at least 1")

    population = _random_population(cities, population_size)
    best_fitness_so_far = -math.inf
    stale = 0

    for gen in range(generations):
        mutation_rate = base_mutation_rate * (1.0 - gen / generations)

        if executor is None:
            children = [_child(population, cities, mutation_rate) for _ in range(population_size)]
        else:
            current = population
            children = list(
                executor.map(
                    lambda _: _child(current, cities, mutation_rate), range(population_size)
                )
            )

        elites = sorted(population, key=lambda ind: ind.fitness, reverse=True)[:elitism_k]
        children[: len(elites)] = elites
        population = children

        if refine_start is not None and gen >= refine_start and gen % refine_every == 0:
            head = population[:top_n]
            if executor is None:
                refined = [_refined(ind, cities) for ind in head]
            else:
                refined = list(executor.map(lambda ind: _refined(ind, cities), head))
            population[: len(refined)] = refined

        best = max(population, key=lambda ind: ind.fitness)
        if gen % REPORT_EVERY == 0 or gen == generations - 1:
            logger.info(
                "Generation %d: Best distance = %.4f | Mutation rate = %.4f",
                gen,
                best.distance(),
                mutation_rate,
            )

        if best.fitness > best_fitness_so_far:
            best_fitness_so_far = best.fitness
            stale = 0
        else:
            stale += 1
        if stale >= EARLY_STOP_PATIENCE:
            logger.info(
                "Early stopping at generation %d (no improvement in %d generations)",
                gen,
                EARLY_STOP_PATIENCE,
            )
            break

    best = max(population, key=lambda ind: ind.fitness)
    return _refined(best, cities)


def run_ga_baseline(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
) -> Individual:
    """GA keeping the 5 best each generation, with a single 2-opt pass at the end."""
    return _evolve(
        cities,
        population_size,
        generations,
        base_mutation_rate,
        elitism_k=BASELINE_ELITISM,
        refine_start=None,
        refine_every=1,
        top_n=0,
        executor=None,
    )


def run_ga_config(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
    elitism_k: int,
    refine_start: int,
    refine_every: int,
    top_n: int,
) -> Individual:
    """GA with configurable elitism and 2-opt on the first ``top_n`` individuals.

    Refinement happens at generations from ``refine_start`` on that are
    multiples of ``refine_every``.
    """
    return _evolve(
        cities,
        population_size,
        generations,
        base_mutation_rate,
        elitism_k,
        refine_start,
        refine_every,
        top_n,
        executor=None,
    )


def run_ga_parallel(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
    elitism_k: int,
    refine_start: int,
    refine_every: int,
    top_n: int,
) -> Individual:
    """Same as :func:`run_ga_config`, breeding and refining on a thread pool."""
    with ThreadPoolExecutor() as executor:
        return _evolve(
            cities,
            population_size,
            generations,
            base_mutation_rate,
            elitism_k,
            refine_start,
            refine_every,
            top_n,
            executor=executor,
        )