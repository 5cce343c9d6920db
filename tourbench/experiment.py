"""Benchmark runner: load a TSPLIB instance, run every solver, record a CSV."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from tourbench.annealing import simulated_annealing
from tourbench.geometry import Point, TSPResult
from tourbench.greedy import greedy
from tourbench.gridsa import grid_sa, grid_sa_fast
from tourbench.held_karp import held_karp
from tourbench.insertion import nearest_insertion
from tourbench.mst import mst_2approx

Solver = Callable[[Sequence[Point]], TSPResult]

CSV_HEADER = "TSP_File,Algorithm,Cost,Time_ms,Num_Cities\n"

ALGORITHMS: tuple[tuple[str, Solver], ...] = (
    ("Grid SA", grid_sa),
    ("Grid SA fast", grid_sa_fast),
    ("Greedy Heuristic", greedy),
    ("Held-Karp", held_karp),
    ("MST-based 2-approx", mst_2approx),
    ("Simulated Annealing", simulated_annealing),
    ("Insertion Method", nearest_insertion),
)
"""Solvers run by :func:`run_experiment`, in the order they are run."""

_log = logging.getLogger(__name__)


def _parse_coord_line(line: str) -> Point | None:
    fields = line.split()
    if len(fields) < 3:
        return None
    try:
        int(fields[0])
        return Point(float(fields[1]), float(fields[2]))
    except ValueError:
        return None


def load_tsp_file(fname: str | Path) -> list[Point]:
    """Read the NODE_COORD_SECTION of a TSPLIB file as a list of points.

    Header lines, blank lines and lines that do not hold an integer id
    followed by two coordinates are skipped; reading stops at ``EOF``.
    Raises OSError if the file cannot be opened.
    """
    points: list[Point] = []
    reading = False
    with open(fname, encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            line = raw.rstrip("\r\n")
            tag = "".join(line.split()).upper()
            if tag == "NODE_COORD_SECTION":
                reading = True
                continue
            if tag == "EOF":
                break
            if not reading or not line.strip(" \t"):
                continue
            point = _parse_coord_line(line)
            if point is not None:
                points.append(point)

    if not points:
        _log.warning("Could NOT parse coordinates from %s", fname)
    return points


def csv_filename(tsp_path: str) -> str:
    """Name of the result file for an instance: ``dir/a280.tsp`` gives ``a280_result.csv``."""
    slash = max(tsp_path.rfind("/"), tsp_path.rfind("\\"))
    filename = tsp_path[slash + 1 :]
    dot = filename.rfind(".")
    stem = filename if dot == -1 else filename[:dot]
    return f"{stem}_result.csv"


def write_csv_header(filename: str | Path) -> None:
    """Create or truncate ``filename`` and write the result header."""
    with open(filename, "w", encoding="utf-8", newline="") as out:
        out.write(CSV_HEADER)


def append_csv_row(
    filename: str | Path,
    tsp_file: str,
    algo_name: str,
    cost: float,
    time_ms: int,
    num_cities: int,
) -> None:
    """Append one result row; the cost is written with two decimals."""
    with open(filename, "a", encoding="utf-8", newline="") as out:
        out.write(f"{tsp_file},{algo_name},{cost:.2f},{time_ms},{num_cities}\n")


def run_and_record(
    tsp_file: str,
    name: str,
    algo: Solver,
    points: Sequence[Point],
    csv_file: str | Path,
) -> TSPResult:
    """Time ``algo`` on ``points``, report it and append it to ``csv_file``."""
    start = time.perf_counter_ns()
    result = algo(points)
    elapsed_ms = (time.perf_counter_ns() - start) // 1_000_000

    print(f"[{name}] Cost: {result.total_cost:g}, Time: {elapsed_ms} ms", flush=True)
    append_csv_row(csv_file, tsp_file, name, result.total_cost, elapsed_ms, len(points))
    return result


def run_experiment(tsp_file: str) -> dict[str, TSPResult]:
    """Run each solver on ``tsp_file`` and write ``<stem>_result.csv`` in the working directory.

    Returns the results keyed by solver name.
    """
    print(f"==== Running TSP algorithms on: {tsp_file} ====")
    points = load_tsp_file(tsp_file)
    print(f"Loaded points: {len(points)}")

    csv_file = csv_filename(tsp_file)
    write_csv_header(csv_file)

    return {
        name: run_and_record(tsp_file, name, algo, points, csv_file)
        for name, algo in ALGORITHMS
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: expects exactly one TSP file path."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: tourbench [tsp_file_path]", file=sys.stderr)
        return 1
    run_experiment(args[0])
    return 0


if __name__ == "__main__":
    sys.exit(main())