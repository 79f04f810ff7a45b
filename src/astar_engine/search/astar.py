"""A* search over caller-defined graphs.

This module implements the A* relaxation loop in two operating modes: an
unbounded search that finds a path or reports that none exists, and a bounded
search that gives up after a fixed number of neighbor examinations and caps
the length of the reconstructed path.

The graph is never stored here. Nodes implement the ``Pather`` contract and
every call builds its own node cache and frontier, so concurrent calls do not
share mutable state.
"""

import math
import time
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from astar_engine.core.data_models import (
    BoundedPathResult, Pather, PathResult, SearchState, SearchStatistics
)
from astar_engine.search.frontier import PriorityFrontier
from astar_engine.search.node_cache import NodeCache

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    try_limit: int = 10000  # neighbor examinations allowed in bounded mode
    len_max: int = 1000  # longest path returned in bounded mode
    statistics_tracking: bool = True  # publish per-call statistics


class AStarSearcher:
    """A* search engine.

    Both modes share one relaxation loop. The goal is detected when it first
    shows up as a neighbor of an expanded node, not when it is popped from the
    frontier, and the search returns at that point without checking whether a
    cheaper route to the goal could still exist. This is optimal when the
    heuristic is consistent and the cost of entering a node does not depend on
    where the move comes from (as on grid worlds); on general weighted graphs
    it returns the first route found.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        self.statistics = SearchStatistics()

        logger.debug(f"A* searcher initialized with try_limit={self.config.try_limit}, "
                     f"len_max={self.config.len_max}")

    def find_path(self, start: Pather, goal: Pather) -> PathResult:
        """Find the cheapest path from ``start`` to ``goal``.

        Args:
            start: Node the search starts from
            goal: Node to reach, matched by identity

        Returns:
            PathResult with the path ordered goal first, its cost and whether
            a path was found. ``found`` is False (and ``cost`` is infinite)
            when the goal is unreachable.
        """
        path, cost, found, _ = self._search(start, goal, try_limit=None, len_max=None)
        return PathResult(path, cost, found)

    def find_path_bounded(self, start: Pather, goal: Pather,
                          try_limit: Optional[int] = None,
                          len_max: Optional[int] = None) -> BoundedPathResult:
        """Find a path within a fixed work budget.

        Every neighbor examined counts as one attempt. Once the count exceeds
        ``try_limit`` the search stops and returns an empty path. A path that
        is found is truncated to its ``len_max`` nodes nearest the goal, so it
        may not reach ``start``.

        Args:
            start: Node the search starts from
            goal: Node to reach, matched by identity
            try_limit: Maximum neighbor examinations (config default if None)
            len_max: Maximum number of nodes returned (config default if None)

        Returns:
            BoundedPathResult with the (possibly truncated) goal-first path
            and the true number of neighbor examinations
        """
        if try_limit is None:
            try_limit = self.config.try_limit
        if len_max is None:
            len_max = self.config.len_max

        path, _, found, attempts = self._search(start, goal, try_limit=try_limit, len_max=len_max)
        return BoundedPathResult(path if found else [], attempts)

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the last completed search."""
        stats = self.statistics.to_dict()
        stats['config'] = {
            'try_limit': self.config.try_limit,
            'len_max': self.config.len_max,
            'statistics_tracking': self.config.statistics_tracking,
        }
        return stats

    def _search(self, start: Pather, goal: Pather,
                try_limit: Optional[int],
                len_max: Optional[int]) -> Tuple[List[Any], float, bool, int]:
        """Run the relaxation loop.

        Returns:
            Tuple of (goal-first path, cost, found, neighbor examinations)
        """
        stats = SearchStatistics()
        start_time = time.perf_counter()
        attempts = 0

        cache = NodeCache()
        frontier = PriorityFrontier()

        root = cache.get(start)
        root.cost = 0.0
        root.rank = start.path_estimated_cost(goal)
        root.open = True
        frontier.push(root)

        logger.debug(f"Starting A* search (try_limit={try_limit}, len_max={len_max})")

        try:
            while True:
                if frontier.is_empty():
                    stats.termination_reason = "frontier_exhausted"
                    return [], math.inf, False, attempts

                current = frontier.pop_min()
                current.open = False
                current.closed = True
                stats.nodes_expanded += 1

                for neighbor in current.node.path_neighbors():
                    attempts += 1
                    if try_limit is not None and attempts > try_limit:
                        stats.termination_reason = "try_limit_exceeded"
                        return [], math.inf, False, attempts

                    cost = current.cost + current.node.path_neighbor_cost(neighbor)
                    record = cache.get(neighbor)

                    if neighbor is goal:
                        if record is not root:
                            record.parent = current.handle
                            stats.termination_reason = "goal_reached"
                            return self._reconstruct(cache, record, len_max), cost, True, attempts
                        if current is root:
                            # Self-loop on the start node; the root keeps no parent.
                            stats.termination_reason = "goal_reached"
                            return self._reconstruct(cache, root, len_max), cost, True, attempts
                        # Start reached again through a cycle. The root's cost
                        # cannot improve, so normal relaxation ignores it.

                    if cost < record.cost:
                        if record.open:
                            frontier.remove(record)
                            stats.frontier_removals += 1
                        elif record.closed:
                            stats.nodes_reopened += 1
                        record.open = False
                        record.closed = False

                    if not record.open and not record.closed:
                        self._open(frontier, record, current, cost, goal)
                        stats.nodes_generated += 1
                        stats.max_frontier_size = max(stats.max_frontier_size, len(frontier))
        finally:
            stats.neighbors_examined = attempts
            stats.computation_time = time.perf_counter() - start_time
            if self.config.statistics_tracking:
                self.statistics = stats
            logger.debug(f"A* search finished: {stats.termination_reason}, "
                         f"expanded={stats.nodes_expanded}, examined={attempts}, "
                         f"time={stats.computation_time*1000:.2f}ms")

    @staticmethod
    def _open(frontier: PriorityFrontier, record: SearchState, parent: SearchState,
              cost: float, goal: Pather) -> None:
        """Assign a new best cost to ``record`` and push it."""
        record.cost = cost
        record.rank = cost + record.node.path_estimated_cost(goal)
        record.parent = parent.handle
        record.open = True
        frontier.push(record)

    @staticmethod
    def _reconstruct(cache: NodeCache, record: SearchState,
                     len_max: Optional[int]) -> List[Any]:
        """Walk parent handles from ``record`` to the root, goal first."""
        path = []
        handle: Optional[int] = record.handle
        while handle is not None and (len_max is None or len(path) < len_max):
            current = cache.record(handle)
            path.append(current.node)
            handle = current.parent
        return path


def create_astar_searcher(try_limit: int = 10000,
                          len_max: int = 1000,
                          statistics_tracking: bool = True) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        try_limit: Default neighbor-examination budget for bounded searches
        len_max: Default path length cap for bounded searches
        statistics_tracking: Record statistics of each call on the searcher

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        try_limit=try_limit,
        len_max=len_max,
        statistics_tracking=statistics_tracking
    )

    return AStarSearcher(config)


def find_path(start: Pather, goal: Pather) -> PathResult:
    """Unbounded A* search with a fresh searcher."""
    return AStarSearcher().find_path(start, goal)


def find_path_bounded(start: Pather, goal: Pather,
                      try_limit: int, len_max: int) -> BoundedPathResult:
    """Bounded A* search with a fresh searcher."""
    return AStarSearcher().find_path_bounded(start, goal, try_limit, len_max)
