"""Weighted adjacency-list graph whose nodes implement ``Pather``."""

from typing import Any, Callable, Dict, List, Optional, Tuple

Heuristic = Callable[[str, str], float]


class GraphNode:
    """Named node of a ``WeightedGraph``.

    Nodes keep insertion order for their outgoing edges, so neighbor
    enumeration is deterministic.
    """

    def __init__(self, name: str, graph: "WeightedGraph", **attrs: Any):
        self.name = name
        self.graph = graph
        self.attrs = attrs
        self.edges: Dict[int, Tuple["GraphNode", float]] = {}

    def path_neighbors(self) -> List["GraphNode"]:
        return [node for node, _ in self.edges.values()]

    def path_neighbor_cost(self, to: "GraphNode") -> float:
        return self.edges[id(to)][1]

    def path_estimated_cost(self, to: "GraphNode") -> float:
        return self.graph.estimate(self, to)

    def __repr__(self) -> str:
        return f"GraphNode({self.name!r})"


class WeightedGraph:
    """Directed weighted graph built edge by edge.

    Args:
        heuristic: Optional estimate ``h(from_name, to_name)``; defaults to 0,
            which is always admissible and consistent
    """

    def __init__(self, heuristic: Optional[Heuristic] = None):
        self.heuristic = heuristic
        self._nodes: Dict[str, GraphNode] = {}

    def add_node(self, name: str, **attrs: Any) -> GraphNode:
        """Add a node, or return the existing one with that name."""
        node = self._nodes.get(name)
        if node is None:
            node = GraphNode(name, self, **attrs)
            self._nodes[name] = node
        else:
            node.attrs.update(attrs)
        return node

    def add_edge(self, a: str, b: str, cost: float, bidirectional: bool = False) -> None:
        """Add an edge ``a -> b`` (and ``b -> a`` if ``bidirectional``).

        Raises:
            ValueError: If ``cost`` is negative
        """
        if cost < 0:
            raise ValueError(f"Edge cost must be non-negative, got {cost}")
        node_a = self.add_node(a)
        node_b = self.add_node(b)
        node_a.edges[id(node_b)] = (node_b, float(cost))
        if bidirectional:
            node_b.edges[id(node_a)] = (node_a, float(cost))

    def node(self, name: str) -> GraphNode:
        """Look up a node by name.

        Raises:
            KeyError: If no node has that name
        """
        return self._nodes[name]

    def nodes(self) -> List[GraphNode]:
        return list(self._nodes.values())

    def estimate(self, a: GraphNode, b: GraphNode) -> float:
        if self.heuristic is None:
            return 0.0
        return float(self.heuristic(a.name, b.name))

    def path_cost(self, path: List[GraphNode]) -> float:
        """Sum of edge costs along ``path`` (in the order given)."""
        return sum(a.path_neighbor_cost(b) for a, b in zip(path, path[1:]))

    def __len__(self) -> int:
        return len(self._nodes)
