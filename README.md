# tspsolve

Heuristics for the symmetric, Euclidean travelling salesman problem, kept
side by side so they can be compared on the same inputs. Only the standard
library is needed.

## Modules

- `tspsolve.utils`: `City` (an `x`, `y` point), `generate_cities(n, seed)`
  (reproducible cities with coordinates in `[0, 1000)`),
  `euclidean_distance`, `compute_total_distance` (closed tour length),
  `shuffle_tour`, a `two_opt` refinement, and the GA building blocks
  `Individual`, `swap_mutation`, `order_crossover` and
  `tournament_selection`.
- `tspsolve.two_opt_seq`: `two_opt_seq`, classic first-improvement 2-opt
  until no improving segment reversal remains.
- `tspsolve.topk`: `par_prototype` applies the single best reversal each
  round; `par_topk` applies up to `k` best non-overlapping reversals;
  `par_topkplus` filters candidates by `delta_thresh` and only commits a
  round if the whole tour gets shorter. All three stop after 1000 rounds,
  logging a warning.
- `tspsolve.multistart`: `two_opt_par_ver2`, `multi_2opt_optimized1` and
  `multi_2opt_optimized2_v2` run 32 randomised starts (shuffles, or
  nearest-neighbour routes from `nearest_neighbour_route`) improved by
  sampled 2-opt moves (`lazy_swap_descent`) and return the cheapest.
- `tspsolve.insertion`: `multi_2opt_random_insert`, the same multi-start
  descent where half the starts are cheapest-insertion routes built by
  `insertion_route`.
- `tspsolve.genetic`: `run_ga_baseline`, `run_ga_config` and
  `run_ga_parallel`: tournament selection, order crossover, swap mutation
  with a decaying rate, elitism, optional periodic 2-opt of the first
  `top_n` individuals, early stopping after 100 generations without
  improvement, and a final 2-opt pass. `run_ga_parallel` breeds and refines
  on a thread pool.
- `tspsolve.logged`: `run_ga` and `run_ga_config_logged`, sequential GAs
  that also write one CSV line per generation
  (`generation,best,avg,median,mutation_rate`) to `log_path`, by default
  `results/GA/fitness.csv`; `generation_stats` and `GenerationStats` compute
  those figures.

Progress of the genetic algorithms is reported through the standard
`logging` module at INFO level.

## Installation

```sh
pip install .
```

To run the test suite:

```sh
pip install ".[test]"
pytest
```

## Library use

```python
from tspsolve.utils import generate_cities, compute_total_distance, shuffle_tour
from tspsolve.two_opt_seq import two_opt_seq
from tspsolve.topk import par_topkplus
from tspsolve.genetic import run_ga_parallel

cities = generate_cities(100, 121)
tour = list(range(len(cities)))
shuffle_tour(tour)
print("initial:", compute_total_distance(tour, cities))

best_tour, cost = two_opt_seq(tour, cities)
print("2-opt:", cost)

best_tour, cost = par_topkplus(tour, cities, 10, 1e-5)
print("top-k++:", cost)

best = run_ga_parallel(cities, 100, 300, 0.1, 5, 100, 100, 10)
print("GA:", best.distance(), best.tour)
```

The 2-opt style solvers take a tour (a list of city indices) and the list of
cities and return a `(tour, cost)` pair. The multi-start solvers use only the
length of the given tour; their starting routes are generated afresh. The
genetic algorithms return an `Individual`, whose `tour` is the route and whose
`distance()` is its length.

## Command-line tools

Run every solver once on ten seeded cities as a sanity check:

```sh
tspsolve
```

Run one solver on problem sizes 50, 100, 200, 500 and 1000 (change them with
`--sizes`), reporting cost and time for each:

```sh
tspsolve-scalability topk
```

Solver names are `seq`, `prototype`, `topk`, `topkplus`, `mult1`, `mult2`,
`mult3`, `mult4`, `ga1`, `ga2` and `ga3`; without a name, `seq` is used.

Time solvers on a single 1000-city instance (`--size` changes it). Name any of
`seq`, `topkplus`, `mult1`, `mult2`, `mult3`, `mult4`, `ga3`, or none to run
them all:

```sh
tspsolve-parallelism
```

Compare the logging GA (`run_ga`) with `run_ga_parallel` across sizes and
seeds; options are `--sizes`, `--seeds`, `--population`, `--generations` and
`--log-path` (its directory is created if missing):

```sh
tspsolve-benchmark
```

## Limits

Cities come only from `generate_cities` or from `City` objects you build
yourself; there is no reader for instance files and no plotting of tours.
The multi-start solvers run their 32 starts one after another in a single
process.