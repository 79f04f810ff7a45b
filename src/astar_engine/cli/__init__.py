"""Command-line interface for astar-engine.

This module provides CLI commands for solving world files, benchmarking and
configuration management.
"""

from .main import main_cli
from .commands import solve_command, bench_command, config_command
from .utils import setup_logging, load_world_from_file, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'bench_command',
    'config_command',
    'setup_logging',
    'load_world_from_file',
    'save_results'
]
