"""Graph representations implementing the Pather contract."""

from .grid_world import (
    GridWorld, Tile, TileKind, WorldParseError, decode, parse_world, render
)
from .graph import GraphNode, WeightedGraph

__all__ = [
    'GridWorld',
    'Tile',
    'TileKind',
    'WorldParseError',
    'decode',
    'parse_world',
    'render',
    'GraphNode',
    'WeightedGraph'
]
