"""
CLI to run graph algorithms over generated mazes across multiple seeds.

Reads a YAML experiment config (a small built-in one by default), generates
a maze per (experiment, seed), builds its MazeGraph, runs each configured
algorithm from the top-left to the bottom-right corner with a
RecordingObserver attached, and produces per-run and aggregated summary
metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple
import argparse
import csv
import logging
import os
import time

import yaml

from maze import generate_random_maze, render_maze
from maze_builder import MazeGraph
from observers import AlgorithmPhase, RecordingObserver

logger = logging.getLogger(__name__)

# Used when no --config is given.
DEFAULT_CONFIG_YAML = """\
seed: 7
seed_count: 2
algorithms: [BFS, DFS, DIJKSTRA]
experiments:
  - name: small_open
    width: 6
    height: 6
    wall_probability: 0.1
    max_weight: 5
  - name: medium
    width: 12
    height: 8
    wall_probability: 0.25
    max_weight: 9
"""

# Output directory name, resolved against the working directory at run time.
DEFAULT_OUT_DIR_NAME = "results"

RUN_FIELDS = [
    "experiment",
    "algorithm",
    "seed",
    "width",
    "height",
    "vertices",
    "edges",
    "visited",
    "concluded",
    "path_length",
    "path_cost",
    "duration_sec",
]

AGGREGATE_FIELDS = [
    "experiment",
    "algorithm",
    "width",
    "height",
    "runs",
    "reach_rate",
    "avg_visited",
    "avg_path_cost",
]


@dataclass(frozen=True)
class MazeExperimentConfig:
    name: str
    width: int
    height: int
    wall_probability: float = 0.3
    max_weight: int = 9

    def validate(self) -> None:
        """
        Raises
        ------
        ValueError
            If the grid is empty or the generator parameters are out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Experiment '{self.name}' needs a positive width and height.")
        if not 0.0 <= self.wall_probability <= 1.0:
            raise ValueError(f"Experiment '{self.name}' wall_probability must be within [0, 1].")
        if self.max_weight < 1:
            raise ValueError(f"Experiment '{self.name}' max_weight must be at least 1.")


@dataclass(frozen=True)
class RunnerConfig:
    seed: int
    seed_count: int
    algorithms: Sequence[AlgorithmPhase]
    experiments: Sequence[MazeExperimentConfig] = field(default_factory=tuple)


def load_config(path: Path | None = None) -> RunnerConfig:
    """Parse the YAML config at `path`, or the built-in default when None."""
    text = DEFAULT_CONFIG_YAML if path is None else path.read_text()
    return _parse_config(yaml.safe_load(text))


def _parse_config(data: Mapping[str, Any]) -> RunnerConfig:
    experiments = [
        MazeExperimentConfig(
            name=str(exp["name"]),
            width=int(exp["width"]),
            height=int(exp["height"]),
            wall_probability=float(exp.get("wall_probability", 0.3)),
            max_weight=int(exp.get("max_weight", 9)),
        )
        for exp in data["experiments"]
    ]
    for exp in experiments:
        exp.validate()

    names = [exp.name for exp in experiments]
    if len(set(names)) != len(names):
        raise ValueError("Experiment names must be unique.")

    try:
        algorithms = [AlgorithmPhase[str(name).upper()] for name in data["algorithms"]]
    except KeyError as exc:
        raise ValueError(f"Unknown algorithm {exc.args[0]!r}; expected one of BFS, DFS, DIJKSTRA.") from exc

    return RunnerConfig(
        seed=int(data["seed"]),
        seed_count=int(data["seed_count"]),
        algorithms=algorithms,
        experiments=experiments,
    )


def run_experiments(
    config_path: Path | None = None,
    runs_csv: Path | None = None,
    aggregates_csv: Path | None = None,
    render: bool = False,
) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    start = time.time()

    existing_runs = load_runs_csv(runs_csv) if runs_csv else []
    seen_keys: Set[Tuple[str, str, int]] = {
        (str(r.get("experiment")), str(r.get("algorithm")), int(r.get("seed", 0))) for r in existing_runs
    }

    tasks: List[Tuple[MazeExperimentConfig, AlgorithmPhase, int]] = []
    for exp in cfg.experiments:
        for algorithm in cfg.algorithms:
            for offset in range(cfg.seed_count):
                seed = cfg.seed + offset
                if (exp.name, algorithm.value, seed) in seen_keys:
                    continue
                tasks.append((exp, algorithm, seed))

    logger.info("queued %d new tasks (existing runs: %d)", len(tasks), len(seen_keys))

    new_results: List[Dict[str, object]] = []
    for exp, algorithm, seed in tasks:
        res = _run_single(exp, algorithm, seed, render=render)
        new_results.append(res)
        if runs_csv:
            append_run_row(runs_csv, res)
        logger.info(
            "completed experiment=%s algorithm=%s seed=%d duration=%.3fs",
            exp.name,
            algorithm.value,
            seed,
            res["duration_sec"],
        )

    results = existing_runs + new_results

    if aggregates_csv:
        write_aggregates_csv(aggregate_by_algorithm(results), aggregates_csv)

    logger.info("completed %d total runs in %.2fs", len(results), time.time() - start)
    return results


def _run_single(
    exp: MazeExperimentConfig, algorithm: AlgorithmPhase, seed: int, render: bool = False
) -> Dict[str, object]:
    start_run = time.time()
    maze = generate_random_maze(
        exp.width,
        exp.height,
        seed=seed,
        wall_probability=exp.wall_probability,
        max_weight=exp.max_weight,
    )
    graph = MazeGraph(maze)
    recorder: RecordingObserver = RecordingObserver()
    graph.add_observer(recorder)

    start = graph.corner("top-left")
    end = graph.corner("bottom-right")

    path_length: Optional[int] = None
    path_cost: Optional[int] = None
    if algorithm is AlgorithmPhase.DIJKSTRA:
        result = graph.shortest_paths(start, end)
        visited = len(recorder.finalized_order)
        concluded = result.reachable
        if result.path is not None:
            path_length = len(result.path)
            path_cost = result.cost_to(end)
        if render:
            logger.info("maze %s seed=%d:\n%s", exp.name, seed, render_maze(maze, result.path))
    else:
        search = graph.search_bfs if algorithm is AlgorithmPhase.BFS else graph.search_dfs
        search(start, end)
        visited = len(recorder.visited_vertices)
        concluded = recorder.concluded == 1

    return {
        "experiment": exp.name,
        "algorithm": algorithm.value,
        "seed": seed,
        "width": exp.width,
        "height": exp.height,
        "metrics": {
            "vertices": len(graph),
            "edges": graph.edge_count(),
            "visited": visited,
            "concluded": concluded,
            "path_length": path_length,
            "path_cost": path_cost,
        },
        "duration_sec": time.time() - start_run,
    }


def aggregate_by_algorithm(results: Iterable[Mapping[str, object]]) -> List[Dict[str, object]]:
    """
    Aggregate metrics per (experiment, algorithm), averaging across seeds.

    avg_path_cost only averages runs that reached the end corner and is None
    when none did.
    """
    counts: Dict[Tuple[str, str], int] = {}
    reached: Dict[Tuple[str, str], int] = {}
    visited_sums: Dict[Tuple[str, str], float] = {}
    cost_sums: Dict[Tuple[str, str], float] = {}
    cost_counts: Dict[Tuple[str, str], int] = {}
    meta: Dict[Tuple[str, str], Dict[str, object]] = {}

    for res in results:
        key = (str(res["experiment"]), str(res["algorithm"]))
        metrics = _metrics_of(res)

        counts[key] = counts.get(key, 0) + 1
        reached[key] = reached.get(key, 0) + (1 if metrics.get("concluded") else 0)
        visited_sums[key] = visited_sums.get(key, 0.0) + float(metrics.get("visited") or 0)
        cost = metrics.get("path_cost")
        if cost is not None:
            cost_sums[key] = cost_sums.get(key, 0.0) + float(cost)
            cost_counts[key] = cost_counts.get(key, 0) + 1
        meta[key] = {"width": int(res.get("width") or 0), "height": int(res.get("height") or 0)}

    rows: List[Dict[str, object]] = []
    for key, n in counts.items():
        experiment, algorithm = key
        with_cost = cost_counts.get(key, 0)
        rows.append(
            {
                "experiment": experiment,
                "algorithm": algorithm,
                "width": meta[key]["width"],
                "height": meta[key]["height"],
                "runs": n,
                "reach_rate": reached[key] / n,
                "avg_visited": visited_sums[key] / n,
                "avg_path_cost": cost_sums[key] / with_cost if with_cost else None,
            }
        )
    return rows


def _metrics_of(res: Mapping[str, object]) -> Mapping[str, object]:
    metrics = res.get("metrics")
    if metrics is None:
        # Resumed rows from runs.csv carry their metrics at the top level.
        return res
    return metrics  # type: ignore[return-value]


def _flatten(res: Mapping[str, object]) -> Dict[str, object]:
    metrics = _metrics_of(res)
    row: Dict[str, object] = {}
    for name in RUN_FIELDS:
        value = res.get(name, metrics.get(name))
        row[name] = "" if value is None else value
    return row


def load_runs_csv(path: Path | None) -> List[Dict[str, object]]:
    if path is None or not path.exists():
        return []
    with path.open() as f:
        reader = csv.DictReader(f)
        rows: List[Dict[str, object]] = []
        for raw in reader:
            row: Dict[str, object] = dict(raw)
            # Normalize fields so aggregation works on resumed runs.
            for key in ("seed", "width", "height", "vertices", "edges", "visited", "path_length", "path_cost"):
                value = raw.get(key, "")
                row[key] = int(value) if value not in ("", None) else None
            row["seed"] = row["seed"] or 0
            row["concluded"] = raw.get("concluded") == "True"
            duration = raw.get("duration_sec", "")
            row["duration_sec"] = float(duration) if duration else 0.0
            rows.append(row)
        return rows


def append_run_row(path: Path, res: Mapping[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not path.exists()
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RUN_FIELDS)
        if write_header:
            writer.writeheader()
        writer.writerow(_flatten(res))


def write_results_csv(results: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write per-run results to CSV for downstream analysis.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RUN_FIELDS)
        writer.writeheader()
        for res in results:
            writer.writerow(_flatten(res))


def write_aggregates_csv(aggregated: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write aggregated metrics by algorithm to CSV.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=AGGREGATE_FIELDS)
        writer.writeheader()
        for row in aggregated:
            writer.writerow({name: "" if row.get(name) is None else row.get(name) for name in AGGREGATE_FIELDS})


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run BFS, DFS and Dijkstra over generated mazes.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML experiment config (defaults to a small built-in set of mazes).",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help=f"Directory for CSV output (defaults to ./{DEFAULT_OUT_DIR_NAME}).",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    parser.add_argument("--render", action="store_true", help="Log each maze with its shortest path.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out_dir = args.out_dir if args.out_dir is not None else Path.cwd() / DEFAULT_OUT_DIR_NAME
    runs_csv = out_dir / "runs.csv"
    aggregates_csv = out_dir / "aggregates.csv"
    results = run_experiments(args.config, runs_csv=runs_csv, aggregates_csv=aggregates_csv, render=args.render)
    for row in aggregate_by_algorithm(results):
        logger.info("aggregate %s", row)
    logger.info("wrote runs to %s and aggregates to %s", runs_csv, aggregates_csv)


if __name__ == "__main__":
    main()
