"""Exact and heuristic solvers for the Euclidean travelling salesman problem, with a TSPLIB benchmark runner."""

__version__ = "0.1.0"