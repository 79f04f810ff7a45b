"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from astar_engine.world.grid_world import GridWorld, WorldParseError, parse_world


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True
    )


def load_world_from_file(file_path: Union[str, Path]) -> GridWorld:
    """Load a text-encoded world from a file.

    Args:
        file_path: Path to the world file

    Returns:
        Parsed GridWorld

    Raises:
        FileNotFoundError: If file doesn't exist
        WorldParseError: If the world has no start or goal tile
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"World file not found: {file_path}")

    world = parse_world(file_path.read_text(encoding='utf-8'))
    if world.from_tile() is None or world.to_tile() is None:
        raise WorldParseError(f"World in {file_path} needs both an 'F' and a 'T' tile")
    return world


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(results, f, indent=2, default=str)
        else:
            json.dump(results, f, default=str)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def format_cost(cost: float) -> str:
    """Format a path cost, dropping the fraction for whole numbers."""
    if float(cost).is_integer():
        return str(int(cost))
    return f"{cost:.3f}"
