"""A* path search over caller-defined weighted graphs."""

from .core.data_models import BoundedPathResult, Pather, PathResult, SearchStatistics
from .search.astar import (
    AStarSearcher, SearchConfig, create_astar_searcher, find_path, find_path_bounded
)

__version__ = "0.1.0"

__all__ = [
    'Pather',
    'PathResult',
    'BoundedPathResult',
    'SearchStatistics',
    'AStarSearcher',
    'SearchConfig',
    'create_astar_searcher',
    'find_path',
    'find_path_bounded',
]
