"""Main CLI entry point for astar-engine."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='astar-engine',
        description='astar-engine - A* path search over text-encoded grid worlds',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  astar-engine solve world.txt                          # Find a path
  astar-engine solve world.txt --bounded --len-max 5    # Bounded search
  astar-engine bench --iterations 50                    # Benchmark the large world
  astar-engine config show                              # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration overrides (e.g., search.bounded.try_limit=500)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Find a path through a world file',
        description='Find a path from F to T in a text-encoded world file'
    )

    solve_parser.add_argument(
        'world_file',
        type=str,
        help='Path to the world text file'
    )

    solve_parser.add_argument(
        '--bounded',
        action='store_true',
        help='Use the bounded search'
    )

    solve_parser.add_argument(
        '--try-limit',
        type=int,
        default=None,
        help='Neighbor examinations allowed in bounded mode (default: from config)'
    )

    solve_parser.add_argument(
        '--len-max',
        type=int,
        default=None,
        help='Longest path returned in bounded mode (default: from config)'
    )

    # Bench command
    bench_parser = subparsers.add_parser(
        'bench',
        help='Benchmark repeated searches',
        description='Time repeated searches over a world (default: built-in large world)'
    )

    bench_parser.add_argument(
        'world_file',
        type=str,
        nargs='?',
        default=None,
        help='Path to the world text file (optional)'
    )

    bench_parser.add_argument(
        '--iterations', '-n',
        type=int,
        default=None,
        help='Number of timed searches (default: from config)'
    )

    bench_parser.add_argument(
        '--bounded',
        action='store_true',
        help='Benchmark the bounded search'
    )

    bench_parser.add_argument(
        '--try-limit',
        type=int,
        default=None,
        help='Neighbor examinations allowed in bounded mode'
    )

    bench_parser.add_argument(
        '--len-max',
        type=int,
        default=None,
        help='Longest path returned in bounded mode'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'bench':
            return commands.bench_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
