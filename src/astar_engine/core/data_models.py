"""Core data models for the A* engine."""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Pather(Protocol):
    """Capability contract a graph node implements to be searchable.

    Node identity is object identity. Two nodes that compare equal by value
    but are different objects are different graph positions.

    Callers guarantee non-negative edge costs and an admissible, consistent
    estimate. The engine does not check either.
    """

    def path_neighbors(self) -> Sequence["Pather"]:
        """Nodes reachable from this node in one step."""
        ...

    def path_neighbor_cost(self, to: "Pather") -> float:
        """Exact cost of moving to the direct neighbor ``to``."""
        ...

    def path_estimated_cost(self, to: "Pather") -> float:
        """Heuristic estimate of the remaining cost to any node ``to``."""
        ...


@dataclass(eq=False)
class SearchState:
    """Mutable per-node bookkeeping owned by a single search.

    Records compare by identity, like the nodes they describe.
    """
    node: Any
    handle: int
    cost: float = math.inf  # g(n)
    rank: float = math.inf  # f(n) = g(n) + h(n)
    parent: Optional[int] = None  # handle of predecessor, None for the root
    open: bool = False
    closed: bool = False
    position: int = -1  # slot in the frontier heap while open


class PathResult(NamedTuple):
    """Outcome of an unbounded search. ``path`` runs goal first, start last."""
    path: List[Any]
    cost: float
    found: bool

    def start_to_goal(self) -> List[Any]:
        """Return the path ordered from start to goal."""
        return list(reversed(self.path))


class BoundedPathResult(NamedTuple):
    """Outcome of a bounded search. ``path`` is empty when none was produced."""
    path: List[Any]
    attempts: int

    @property
    def found(self) -> bool:
        return bool(self.path)


@dataclass
class SearchStatistics:
    """Counters collected during one search call."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    neighbors_examined: int = 0
    nodes_reopened: int = 0
    frontier_removals: int = 0
    max_frontier_size: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'neighbors_examined': self.neighbors_examined,
            'nodes_reopened': self.nodes_reopened,
            'frontier_removals': self.frontier_removals,
            'max_frontier_size': self.max_frontier_size,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
        }
