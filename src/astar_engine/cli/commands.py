"""CLI command implementations."""

import logging
import time
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig

from astar_engine.benchmark.harness import LARGE_WORLD, run_benchmark
from astar_engine.config import ConfigManager, check_config_consistency, ConfigValidationError
from astar_engine.search.astar import AStarSearcher, SearchConfig

from .utils import format_cost, format_duration, load_world_from_file, save_results

logger = logging.getLogger(__name__)

# Command-line flags that override configuration keys
FLAG_KEYS = {
    'try_limit': 'search.bounded.try_limit',
    'len_max': 'search.bounded.len_max',
    'iterations': 'benchmark.iterations',
}


def parse_overrides(config_arg: Optional[str]) -> List[str]:
    """Split a ``--config`` value into Hydra override strings."""
    if not config_arg:
        return []
    return [item.strip() for item in config_arg.replace(',', ' ').split() if item.strip()]


def load_settings(args) -> ConfigManager:
    """Load configuration for a command.

    ``--config`` overrides are applied at load time, then the command's own
    flags (``--try-limit``, ``--len-max``, ``--iterations``) on top of them.
    The log level from the config is applied unless -v or -q was given.

    Raises:
        ConfigValidationError: If any resulting value is invalid
    """
    manager = ConfigManager()
    manager.load_config(overrides=parse_overrides(getattr(args, 'config', None)))

    manager.update_config({
        key: getattr(args, flag) for flag, key in FLAG_KEYS.items()
        if getattr(args, flag, None) is not None
    })

    apply_logging_level(manager.config, args)
    return manager


def apply_logging_level(cfg: DictConfig, args) -> None:
    """Use ``logging.level`` from the config unless -v or -q was given."""
    if getattr(args, 'verbose', 0) or getattr(args, 'quiet', False):
        return
    level = cfg.get('logging', {}).get('level')
    if level:
        logging.getLogger().setLevel(level)


def create_searcher_from_config(cfg: DictConfig) -> AStarSearcher:
    """Build a searcher whose bounded-mode defaults come from ``cfg``."""
    search_cfg = cfg.get('search', {})
    bounded_cfg = search_cfg.get('bounded', {})
    config = SearchConfig(
        try_limit=int(bounded_cfg.get('try_limit', 10000)),
        len_max=int(bounded_cfg.get('len_max', 1000)),
        statistics_tracking=bool(search_cfg.get('statistics_tracking', True))
    )
    return AStarSearcher(config)


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when a path was found)
    """
    try:
        manager = load_settings(args)
        searcher = create_searcher_from_config(manager.get_config())
        world = load_world_from_file(args.world_file)
        start, goal = world.from_tile(), world.to_tile()

        output: Dict[str, Any] = {'world_file': str(args.world_file), 'bounded': args.bounded}

        t0 = time.perf_counter()
        if args.bounded:
            result = searcher.find_path_bounded(start, goal)
        else:
            result = searcher.find_path(start, goal)
        elapsed = time.perf_counter() - t0

        found = result.found
        if args.bounded:
            output['attempts'] = result.attempts
            summary = f"attempts: {result.attempts}"
        else:
            output['cost'] = result.cost if found else None
            summary = f"cost: {format_cost(result.cost)}" if found else "cost: -"

        output['found'] = found
        output['path'] = [[tile.x, tile.y] for tile in result.path]
        output['solve_time'] = elapsed
        output['statistics'] = (searcher.get_search_stats()
                                if searcher.config.statistics_tracking else None)

        if not args.quiet:
            print(world.render_path(result.path))
            print()
            print(f"{'Path found' if found else 'No path found'} "
                  f"({len(result.path)} tiles, {summary}, {format_duration(elapsed)})")

        if args.output:
            save_results(output, args.output)
            logger.info(f"Results saved to {args.output}")

        return 0 if found else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def bench_command(args) -> int:
    """Handle bench command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        manager = load_settings(args)
        searcher = create_searcher_from_config(manager.get_config())

        if args.world_file:
            with open(args.world_file, 'r', encoding='utf-8') as f:
                world_text = f.read()
        else:
            world_text = LARGE_WORLD

        report = run_benchmark(
            world_text,
            iterations=int(manager.get_parameter('benchmark.iterations', 20)),
            bounded=args.bounded,
            config=searcher.config
        )
        summary = report.to_dict()

        if not args.quiet:
            print("=" * 60)
            print("BENCHMARK SUMMARY")
            print("=" * 60)
            print(f"Mode:           {'bounded' if report.bounded else 'unbounded'}")
            print(f"Iterations:     {report.iterations}")
            print(f"Path found:     {report.found}")
            if report.cost is not None:
                print(f"Path cost:      {format_cost(report.cost)}")
            if report.attempts is not None:
                print(f"Attempts:       {report.attempts}")
            if report.nodes_expanded is not None:
                print(f"Nodes expanded: {report.nodes_expanded}")
            print(f"Mean time:      {format_duration(summary['mean_time'])}")
            print(f"Median time:    {format_duration(summary['median_time'])}")
            print(f"95th pct time:  {format_duration(summary['p95_time'])}")

        if args.output:
            save_results(summary, args.output)
            logger.info(f"Results saved to {args.output}")

        return 0

    except Exception as e:
        logger.error(f"Bench command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    ``show`` also writes the configuration as YAML when ``--output`` is set.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            manager = load_settings(args)
            manager.print_config()
            if args.output:
                manager.save_config(args.output)
            return 0

        elif args.config_action == 'validate':
            try:
                manager = load_settings(args)
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1
            for issue in check_config_consistency(manager.get_config()):
                print(f"Warning: {issue}")
            print("Configuration is valid")
            return 0

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
