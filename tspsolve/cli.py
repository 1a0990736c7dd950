"""Command-line runners: correctness check, scalability, parallelism and GA benchmarks."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from tspsolve.genetic import run_ga_baseline, run_ga_config, run_ga_parallel
from tspsolve.insertion import multi_2opt_random_insert
from tspsolve.logged import DEFAULT_LOG_PATH, run_ga
from tspsolve.multistart import (
    multi_2opt_optimized1,
    multi_2opt_optimized2_v2,
    two_opt_par_ver2,
)
from tspsolve.topk import par_prototype, par_topk, par_topkplus
from tspsolve.two_opt_seq import two_opt_seq
from tspsolve.utils import City, compute_total_distance, generate_cities, shuffle_tour

SEED = 121
CORRECTNESS_SIZE = 10
SCALABILITY_SIZES = (50, 100, 200, 500, 1000)
PARALLELISM_SIZE = 1000
BENCHMARK_SIZES = (50, 100, 200, 500, 1000)
BENCHMARK_SEEDS = (42, 123)

Solver = Callable[[Sequence[int], Sequence[City]], float]

SCALABILITY_SOLVERS: dict[str, Solver] = {
    "seq": lambda t, c: two_opt_seq(t, c)[1],
    "prototype": lambda t, c: par_prototype(t, c)[1],
    "topk": lambda t, c: par_topk(t, c, 2)[1],
    "topkplus": lambda t, c: par_topkplus(t, c, 2, 1e-6)[1],
    "mult1": lambda t, c: two_opt_par_ver2(t, c)[1],
    "mult2": lambda t, c: multi_2opt_optimized1(t, c)[1],
    "mult3": lambda t, c: multi_2opt_optimized2_v2(t, c)[1],
    "mult4": lambda t, c: multi_2opt_random_insert(t, c)[1],
    "ga1": lambda t, c: run_ga_baseline(c, 100, 300, 0.1).distance(),
    "ga2": lambda t, c: run_ga_config(c, 100, 300, 0.1, 5, 100, 100, 10).distance(),
    "ga3": lambda t, c: run_ga_parallel(c, 100, 300, 0.1, 5, 100, 100, 10).distance(),
}

PARALLELISM_SOLVERS: dict[str, Solver] = {
    "seq": lambda t, c: two_opt_seq(t, c)[1],
    "topkplus": lambda t, c: par_topkplus(t, c, 10, 1e-5)[1],
    "mult1": lambda t, c: two_opt_par_ver2(t, c)[1],
    "mult2": lambda t, c: multi_2opt_optimized1(t, c)[1],
    "mult3": lambda t, c: multi_2opt_optimized2_v2(t, c)[1],
    "mult4": lambda t, c: multi_2opt_random_insert(t, c)[1],
    "ga3": lambda t, c: run_ga_parallel(c, 300, 1000, 0.10, 2, 300, 100, 10).distance(),
}


def _configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def _format_duration(seconds: float) -> str:
    """Render an elapsed time with two decimals in the largest fitting unit."""
    if seconds >= 1.0:
        return f"{seconds:.2f}s"
    nanos = seconds * 1e9
    if nanos >= 1e6:
        return f"{nanos / 1e6:.2f}ms"
    if nanos >= 1e3:
        return f"{nanos / 1e3:.2f}µs"
    return f"{nanos:.2f}ns"


def _shuffled_tour(n: int) -> list[int]:
    tour = list(range(n))
    shuffle_tour(tour)
    return tour


def _timed(run: Callable[[], float]) -> tuple[float, str]:
    start = time.perf_counter()
    cost = run()
    return cost, _format_duration(time.perf_counter() - start)


def main(argv: Sequence[str] | None = None) -> int:
    """Run every solver once on ten seeded cities and print each final cost."""
    argparse.ArgumentParser(
        prog="tspsolve", description="Correctness run of every TSP solver."
    ).parse_args(argv)
    _configure_logging()

    cities = generate_cities(CORRECTNESS_SIZE, SEED)
    tour = _shuffled_tour(CORRECTNESS_SIZE)
    print(f"Initial tour: {tour}, cost = {compute_total_distance(tour, cities):.2f}")

    runs: list[tuple[str, Callable[[], float]]] = [
        ("two_opt_seq", lambda: two_opt_seq(tour, cities)[1]),
        ("par_prototype", lambda: par_prototype(tour, cities)[1]),
        ("par_topk (k=2)", lambda: par_topk(tour, cities, 2)[1]),
        ("par_topkplus (k=2, δ=1e-6)", lambda: par_topkplus(tour, cities, 2, 1e-6)[1]),
        ("two_opt_par_ver2", lambda: two_opt_par_ver2(tour, cities)[1]),
        ("optimized_multithread_2opt", lambda: multi_2opt_optimized1(tour, cities)[1]),
        ("optimized_ver2_multi2opt", lambda: multi_2opt_optimized2_v2(tour, cities)[1]),
        ("random_insert_ver3_multi2opt", lambda: multi_2opt_random_insert(tour, cities)[1]),
        ("ga_baseline", lambda: run_ga_baseline(cities, 20, 100, 0.1).distance()),
        (
            "ga_config",
            lambda: run_ga_config(cities, 20, 100, 0.1, 2, 30, 20, 5).distance(),
        ),
        (
            "par_ga",
            lambda: run_ga_parallel(cities, 20, 100, 0.1, 2, 30, 20, 5).distance(),
        ),
    ]
    for label, run in runs:
        print(f"{label}: {run():.2f}")
    return 0


def scalability(argv: Sequence[str] | None = None) -> int:
    """Run one solver over growing problem sizes, printing cost and time for each."""
    parser = argparse.ArgumentParser(
        prog="tspsolve-scalability", description="Scalability test of one solver."
    )
    parser.add_argument("version", nargs="?", default="seq", help="solver to run")
    parser.add_argument(
        "--sizes", nargs="+", type=int, default=list(SCALABILITY_SIZES), help="problem sizes"
    )
    args = parser.parse_args(argv)
    if args.version not in SCALABILITY_SOLVERS:
        parser.error(
            f"unknown version `{args.version}` (choose from {', '.join(SCALABILITY_SOLVERS)})"
        )
    _configure_logging()
    solver = SCALABILITY_SOLVERS[args.version]

    print(f"Running scalability test for version: `{args.version}`")
    for n in args.sizes:
        print(f"\nProblem size: {n}")
        cities = generate_cities(n, SEED)
        tour = _shuffled_tour(n)
        cost, elapsed = _timed(lambda: solver(tour, cities))
        print(f"Final cost: {cost:.2f}")
        print(f"Time: {elapsed}")
    return 0


def parallelism(argv: Sequence[str] | None = None) -> int:
    """Run the chosen solvers (all by default) on one seeded problem and time each."""
    parser = argparse.ArgumentParser(
        prog="tspsolve-parallelism", description="Time solvers on a single problem size."
    )
    parser.add_argument("versions", nargs="*", help="solvers to run, all when omitted")
    parser.add_argument("--size", type=int, default=PARALLELISM_SIZE, help="number of cities")
    args = parser.parse_args(argv)
    unknown = [name for name in args.versions if name not in PARALLELISM_SOLVERS]
    if unknown:
        parser.error(
            f"unknown version `{unknown[0]}` (choose from {', '.join(PARALLELISM_SOLVERS)})"
        )
    _configure_logging()

    cities = generate_cities(args.size, SEED)
    tour = _shuffled_tour(args.size)
    selected = args.versions or list(PARALLELISM_SOLVERS)
    for name in selected:
        solver = PARALLELISM_SOLVERS[name]
        print(f"\nRunning version `{name}`")
        cost, elapsed = _timed(lambda: solver(list(tour), cities))
        print(f"Final cost: {cost:.2f}")
        print(f"Time: {elapsed}")
    return 0


def benchmark(argv: Sequence[str] | None = None) -> int:
    """Compare the logged GA with the parallel GA over several sizes and seeds."""
    parser = argparse.ArgumentParser(
        prog="tspsolve-benchmark", description="Benchmark the genetic algorithms."
    )
    parser.add_argument(
        "--sizes", nargs="+", type=int, default=list(BENCHMARK_SIZES), help="problem sizes"
    )
    parser.add_argument(
        "--seeds", nargs="+", type=int, default=list(BENCHMARK_SEEDS), help="city seeds"
    )
    parser.add_argument("--population", type=int, default=300, help="population size")
    parser.add_argument("--generations", type=int, default=1000, help="generation limit")
    parser.add_argument(
        "--log-path", type=Path, default=DEFAULT_LOG_PATH, help="CSV file for fitness logs"
    )
    args = parser.parse_args(argv)
    _configure_logging()
    args.log_path.parent.mkdir(parents=True, exist_ok=True)

    for n in args.sizes:
        for seed in args.seeds:
            print(f"================ n = {n}, seed = {seed} ================")
            cities = generate_cities(n, seed)

            dist, elapsed = _timed(
                lambda: run_ga(
                    cities, args.population, args.generations, 0.10, args.log_path
                ).distance()
            )
            print(f"Delayed 2-Opt GA: dist = {dist:.2f}, time = {elapsed}")

            dist, elapsed = _timed(
                lambda: run_ga_parallel(
                    cities, args.population, args.generations, 0.10, 2, 300, 100, 10
                ).distance()
            )
            print(f"Parallel GA: dist = {dist:.2f}, time = {elapsed}")
            print()
    return 0