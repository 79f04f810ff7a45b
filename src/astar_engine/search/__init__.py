"""A* search engine.

This module exposes the search engine together with the per-search node cache
and the indexed priority frontier it is built on.
"""

from .node_cache import NodeCache
from .frontier import PriorityFrontier
from .astar import (
    AStarSearcher, SearchConfig, create_astar_searcher, find_path, find_path_bounded
)

__all__ = [
    'NodeCache',
    'PriorityFrontier',
    'AStarSearcher',
    'SearchConfig',
    'create_astar_searcher',
    'find_path',
    'find_path_bounded'
]
