"""Heuristic solvers for the Euclidean travelling salesman problem: 2-opt variants, multi-start descents and genetic algorithms."""

__version__ = "0.1.0"