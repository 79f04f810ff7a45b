"""Benchmark harness for repeated searches over a grid world."""

import time
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from astar_engine.search.astar import AStarSearcher, SearchConfig
from astar_engine.world.grid_world import decode

logger = logging.getLogger(__name__)


LARGE_WORLD = """
F............................~.................................................
.............................~.................................................
........M...........X........~.................................................
.......MMM.........X.........~~................................................
........MM........X...........~................................................
.......MM........X............~................................................
................X.............~................................................
...............X..............~~...............................................
..............X................~...............................................
.............X.................~...X...............~...........................
............X.......................X..............~...........................
...........X.........................X.............~...........................
..........X..................~........X............~...........................
.........X...................~.........X...........~...........................
.............................~..........X..........~...............XXXXXXXXXXXX
............................~............X..........~..............X...X...X...
............................~.............X.........~......MMM.....X.X.X.X.X.X.
............................~..............X........~......MM......X.X.X.X.X.X.
............................~...............X.......~....MMMM......X.X.X.X.X.X.
...........................~.................X.....~......MMM......X.X.X.X.X.X.
..............................................X....~.......MM......X.X.X.X.X.X.
...............................................X...~.......M.........X...X...XT
"""


@dataclass
class BenchmarkReport:
    """Timings and outcome of a benchmark run."""
    iterations: int
    bounded: bool
    found: bool
    cost: Optional[float] = None
    attempts: Optional[int] = None
    path_length: int = 0
    nodes_expanded: Optional[int] = None  # None when statistics tracking is off
    timings: List[float] = field(default_factory=list)

    @property
    def mean_time(self) -> float:
        return float(np.mean(self.timings)) if self.timings else 0.0

    @property
    def median_time(self) -> float:
        return float(np.median(self.timings)) if self.timings else 0.0

    @property
    def p95_time(self) -> float:
        return float(np.percentile(self.timings, 95)) if self.timings else 0.0

    def to_dict(self) -> Dict[str, Any]:
        timings = np.asarray(self.timings, dtype=np.float64)
        return {
            'iterations': self.iterations,
            'bounded': self.bounded,
            'found': self.found,
            'cost': self.cost,
            'attempts': self.attempts,
            'path_length': self.path_length,
            'nodes_expanded': self.nodes_expanded,
            'mean_time': self.mean_time,
            'median_time': self.median_time,
            'p95_time': self.p95_time,
            'min_time': float(timings.min()) if timings.size else 0.0,
            'max_time': float(timings.max()) if timings.size else 0.0,
        }


def run_benchmark(world_text: str = LARGE_WORLD,
                  iterations: int = 20,
                  bounded: bool = False,
                  try_limit: Optional[int] = None,
                  len_max: Optional[int] = None,
                  config: Optional[SearchConfig] = None) -> BenchmarkReport:
    """Time ``iterations`` searches from the world's start to its goal.

    Args:
        world_text: Text-encoded world
        iterations: Number of timed searches
        bounded: Use the bounded search instead of the unbounded one
        try_limit: Attempt budget for bounded runs (config default if None)
        len_max: Path length cap for bounded runs (config default if None)
        config: Searcher configuration

    Returns:
        BenchmarkReport with per-iteration timings and the last outcome
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")

    _, start, goal = decode(world_text)
    searcher = AStarSearcher(config)
    report = BenchmarkReport(iterations=iterations, bounded=bounded, found=False)

    logger.info(f"Running {'bounded' if bounded else 'unbounded'} benchmark "
                f"for {iterations} iterations")

    for _ in range(iterations):
        t0 = time.perf_counter()
        if bounded:
            result = searcher.find_path_bounded(start, goal, try_limit, len_max)
        else:
            result = searcher.find_path(start, goal)
        report.timings.append(time.perf_counter() - t0)

    if bounded:
        report.found = result.found
        report.attempts = result.attempts
    else:
        report.found = result.found
        report.cost = result.cost if result.found else None
    report.path_length = len(result.path)
    if searcher.config.statistics_tracking:
        report.nodes_expanded = searcher.statistics.nodes_expanded

    logger.info(f"Benchmark finished: mean={report.mean_time*1000:.3f}ms, "
                f"found={report.found}")
    return report
