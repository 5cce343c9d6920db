# tourbench

Solvers for the symmetric Euclidean travelling salesman problem, and a command
that runs all of them on a TSPLIB file and records each tour's cost and run
time in a CSV file.

## Installation

```
pip install .
```

No dependencies beyond the standard library.

## Points and results

`tourbench.geometry` defines the shared types:

- `Point(x, y)` is a frozen dataclass that holds a city location.
- `TSPResult(path, total_cost)` is a tour given as a list of city indices, along with its length.
- `dist(a, b)` returns the Euclidean distance between two points.
- `path_length(path, points)` returns the sum of the distances between consecutive cities of `path`.

Every solver takes a sequence of `Point` and returns a `TSPResult` whose path
starts and ends at city 0.

## Solvers

| Function | Module | What it does |
| --- | --- | --- |
| `held_karp(points)` | `tourbench.held_karp` | Exact dynamic programming over subsets. Time is O(n²·2ⁿ) and memory is O(n·2ⁿ), so use it only on small inputs. Raises `ValueError` on an empty input. |
| `mst_2approx(points)` | `tourbench.mst` | Builds Prim's minimum spanning tree from city 0, walks it as an Euler tour, and keeps the first visit to each city. The result is at most twice the optimum. |
| `greedy(points)` | `tourbench.greedy` | Nearest-neighbour tour. Raises `ValueError` on an empty input. |
| `nearest_insertion(points)` | `tourbench.insertion` | Repeatedly inserts the unvisited city closest to the tour at its cheapest position. Needs at least two points. |
| `simulated_annealing(points, rng=None)` | `tourbench.annealing` | Starts from a random tour. Each move reverses a segment. Temperature starts at 1000, cools by 0.995 per step, and stops below 1e-6, with 100 moves per temperature. Returns the best tour it saw. |
| `grid_sa(points, rng=None)` | `tourbench.gridsa` | Handles inputs of more than 280 cities; smaller inputs go to `simulated_annealing`. Splits the cities into quadtree cells of at most 280 cities and anneals each cell. Orders the cells by an MST tour of their centroids, joins the cell tours, then runs up to 8 passes of 2-opt on the whole tour. |
| `grid_sa_fast(points, workers=None)` | `tourbench.gridsa` | Same as `grid_sa`, but anneals the cells in a process pool. Cell `g` uses a generator seeded with `1234 + g % workers`, so a given worker count gives reproducible results. `workers` defaults to the CPU count. |

Pass a `random.Random` as `rng` to make the annealing solvers reproducible.

The building blocks are public as well:

- `tourbench.mst`: `build_mst`, `euler_tour`, `shortcut`, `mst_order`.
- `tourbench.greedy`: `find_nearest`.
- `tourbench.insertion`: `best_insertion_position`.
- `tourbench.annealing`: `closed_tour_cost`, `create_initial_path`, `get_neighbor`.
- `tourbench.gridsa`: `two_opt_once`, `two_opt_full`, `anneal_tour`, `split_grids`, `stitch_tours`, and the constants `GRID_CELL_LIMIT` and `FAST_BASE_SEED`.

## Library use

```python
import random

from tourbench.geometry import Point
from tourbench.held_karp import held_karp
from tourbench.greedy import greedy
from tourbench.annealing import simulated_annealing

cities = [Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)]

exact = held_karp(cities)
print(exact.path, exact.total_cost)   # [0, 3, 2, 1, 0] 4.0

print(greedy(cities).total_cost)
print(simulated_annealing(cities, random.Random(42)).total_cost)
```

## Running a benchmark

```
tourbench path/to/a280.tsp
```

You can also run `python -m tourbench.experiment path/to/a280.tsp`. The same
steps are available from code as `tourbench.experiment.run_experiment`, which
returns the results keyed by solver name.

The command does the following:

1. Reads the `NODE_COORD_SECTION` of the file. It skips blank lines and lines that are not an integer id followed by two coordinates, and it stops at `EOF`.
2. Runs every solver in `tourbench.experiment.ALGORITHMS`, in this order: Grid SA, Grid SA fast, Greedy Heuristic, Held-Karp, MST-based 2-approx, Simulated Annealing, Insertion Method.
3. Prints each cost and time.
4. Writes `a280_result.csv` to the current directory, one row per solver, with the cost rounded to two decimals:

```
TSP_File,Algorithm,Cost,Time_ms,Num_Cities
```

With no argument, or with more than one, the command prints a usage line and exits with status 1.

## Limits

- The command always runs every solver, and you cannot choose a subset from the command line. Held-Karp is among them, and its memory grows as 2ⁿ, so a file of more than about twenty cities will not finish. To benchmark larger instances, call the solvers from code.
- The command reads only coordinates from `NODE_COORD_SECTION`. It does not use other TSPLIB edge-weight formats, and distances are always Euclidean.
- The command writes nothing except the CSV file. It does not save the tours themselves and does not plot them.

## Tests

```
pip install .[test]
pytest
```