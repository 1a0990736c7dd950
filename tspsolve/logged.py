"""Sequential genetic algorithms that write per-generation fitness statistics to CSV."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from tspsolve.utils import (
    City,
    Individual,
    order_crossover,
    swap_mutation,
    tournament_selection,
    two_opt,
)

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = Path("results/GA/fitness.csv")
CSV_HEADER = "generation,best,avg,median,mutation_rate"
TOURNAMENT_SIZE = 5
EARLY_STOP_PATIENCE = 100
BASELINE_ELITISM = 5
REPORT_EVERY = 50


@dataclass(frozen=True)
class GenerationStats:
    """Fitness summary of one generation."""

    generation: int
    best: float
    avg: float
    median: float
    mutation_rate: float

    def csv_row(self) -> str:
        """The statistics as one CSV line, floats to five decimals."""
        return (
            f"{self.generation},{self.best:.5f},{self.avg:.5f},"
            f"{self.median:.5f},{self.mutation_rate:.5f}"
        )


def generation_stats(
    generation: int, population: Sequence[Individual], mutation_rate: float
) -> GenerationStats:
    """Best, mean and median fitness of ``population``."""
    if not population:
        raise ValueError("cannot summarise an empty population")
    fitnesses = sorted(individual.fitness for individual in population)
    size = len(fitnesses)
    middle = size // 2
    if size % 2 == 0:
        median = (fitnesses[middle - 1] + fitnesses[middle]) / 2.0
    else:
        median = fitnesses[middle]
    return GenerationStats(
        generation=generation,
        best=fitnesses[-1],
        avg=sum(fitnesses) / size,
        median=median,
        mutation_rate=mutation_rate,
    )


def _breed(
    population: Sequence[Individual], cities: Sequence[City], mutation_rate: float
) -> Individual:
    parent1 = tournament_selection(population, TOURNAMENT_SIZE)
    parent2 = tournament_selection(population, TOURNAMENT_SIZE)
    tour = order_crossover(parent1.tour, parent2.tour)
    if random.random() < mutation_rate:
        swap_mutation(tour)
    return Individual.from_tour(tour, cities)


def _refine(individual: Individual, cities: Sequence[City]) -> Individual:
    return Individual.from_tour(two_opt(individual.tour, cities), cities)


def _evolve_logged(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
    elitism_k: int,
    refine_start: int | None,
    refine_every: int,
    top_n: int,
    log: TextIO,
) -> Individual:
    if population_size < 1:
        raise ValueError("population size must be at least 1")
    if refine_start is not None and refine_every < 1:
        raise ValueError("refine_every must be at least 1")

    log.write(CSV_HEADER + "\n")

    population = []
    for _ in range(population_size):
        tour = list(range(len(cities)))
        random.shuffle(tour)
        population.append(Individual.from_tour(tour, cities))

    best_fitness_so_far = -math.inf
    stale = 0

    for gen in range(generations):
        mutation_rate = base_mutation_rate * (1.0 - gen / generations)
        children = [_breed(population, cities, mutation_rate) for _ in range(population_size)]

        elites = sorted(population, key=lambda ind: ind.fitness, reverse=True)[:elitism_k]
        children[: len(elites)] = elites
        population = children

        if refine_start is not None and gen >= refine_start and gen % refine_every == 0:
            refined = [_refine(ind, cities) for ind in population[:top_n]]
            population[: len(refined)] = refined

        best = max(population, key=lambda ind: ind.fitness)
        log.write(generation_stats(gen, population, mutation_rate).csv_row() + "\n")

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
    return _refine(best, cities)


def run_ga(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
    log_path: str | Path = DEFAULT_LOG_PATH,
) -> Individual:
    """GA keeping the 5 best each generation, logging fitness to ``log_path``, 2-opt at the end."""
    with open(log_path, "w", encoding="utf-8", newline="") as log:
        return _evolve_logged(
            cities,
            population_size,
            generations,
            base_mutation_rate,
            elitism_k=BASELINE_ELITISM,
            refine_start=None,
            refine_every=1,
            top_n=0,
            log=log,
        )


def run_ga_config_logged(
    cities: Sequence[City],
    population_size: int,
    generations: int,
    base_mutation_rate: float,
    elitism_k: int,
    refine_start: int,
    refine_every: int,
    top_n: int,
    log_path: str | Path = DEFAULT_LOG_PATH,
) -> Individual:
    """Configurable GA with delayed 2-opt on the first ``top_n`` individuals, logging to CSV."""
    with open(log_path, "w", encoding="utf-8", newline="") as log:
        return _evolve_logged(
            cities,
            population_size,
            generations,
            base_mutation_rate,
            elitism_k,
            refine_start,
            refine_every,
            top_n,
            log=log,
        )