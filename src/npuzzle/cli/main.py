"""Main CLI entry point for the N-puzzle solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


METHOD_HELP = ("Heuristic: uniform_cost, misplaced_tiles or manhattan_distance "
               "(or 1, 2, 3). Defaults to search.heuristic from the configuration")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='npuzzle',
        description='N-puzzle solver - best-first search with pluggable heuristics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  npuzzle solve                                   # Solve the built-in example
  npuzzle solve --start "1 2 3 4 0 6 7 5 8" --method 2
  npuzzle batch puzzles.json --threads 4          # Solve a list of puzzles
  npuzzle config show                             # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        help='Configuration override (e.g., search.heuristic=misplaced_tiles); repeatable'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (-v for progress, -vv for the expansion trace)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress logs and summaries; print only the JSON results'
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
        help='Solve a single puzzle',
        description='Solve a single puzzle; unspecified grids come from the configuration'
    )

    solve_parser.add_argument(
        '--start', '-s',
        type=str,
        help='Start grid, row-major ("1 6 7 5 0 3 4 8 2") or JSON ("[[1,6,7],...]")'
    )

    solve_parser.add_argument(
        '--goal', '-g',
        type=str,
        help='Goal grid in the same formats as --start'
    )

    solve_parser.add_argument(
        '--method', '-m',
        type=str,
        help=METHOD_HELP
    )

    solve_parser.add_argument(
        '--max-nodes',
        type=int,
        help='Stop after expanding this many nodes'
    )

    solve_parser.add_argument(
        '--timeout', '-t',
        type=float,
        help='Time limit in seconds'
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Solve multiple puzzles',
        description='Solve puzzles listed in a JSON file of {"start": ..., "goal": ...} objects'
    )

    batch_parser.add_argument(
        'input_path',
        type=str,
        help='JSON file containing a list of puzzles'
    )

    batch_parser.add_argument(
        '--method', '-m',
        type=str,
        help=METHOD_HELP
    )

    batch_parser.add_argument(
        '--threads', '-j',
        type=int,
        help='Number of parallel threads (default: batch.max_workers)'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect solver configuration'
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
        if parsed_args.command == 'batch':
            return commands.batch_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
