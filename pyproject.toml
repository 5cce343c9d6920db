[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tourbench"
version = "0.1.0"
description = "Exact and heuristic solvers for the Euclidean travelling salesman problem, with a benchmark runner for TSPLIB files"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tsp",
    "travelling salesman",
    "held-karp",
    "minimum spanning tree",
    "simulated annealing",
    "2-opt",
    "heuristics",
    "benchmark",
    "tsplib",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tourbench = "tourbench.experiment:main"

[tool.hatch.build.targets.wheel]
packages = ["tourbench"]

[tool.pytest.ini_options]
addopts = "-ra"
