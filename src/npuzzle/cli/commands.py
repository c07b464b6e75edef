"""CLI command implementations."""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from omegaconf import OmegaConf

from npuzzle.config import load_config, ConfigValidationError
from npuzzle.core.data_models import Grid
from npuzzle.search.astar import SearchOutcome, create_astar_searcher
from npuzzle.search.batch import solve_batch
from npuzzle.search.heuristics import HeuristicMethod

from .utils import (
    parse_grid, load_puzzles_from_file, save_results, format_duration, format_grid,
    create_result_summary, print_summary
)

logger = logging.getLogger(__name__)


class PuzzleSolver:
    """Binds the loaded configuration to the search engine."""

    def __init__(self, config_overrides: Optional[List[str]] = None):
        """Initialize solver.

        Args:
            config_overrides: List of configuration overrides
        """
        self.config = load_config(overrides=config_overrides or [])

        puzzle_cfg = self.config.puzzle
        search_cfg = self.config.search
        self.goal = OmegaConf.to_container(puzzle_cfg.goal, resolve=True)
        self.default_start = OmegaConf.to_container(puzzle_cfg.default_start, resolve=True)
        self.method = HeuristicMethod.parse(search_cfg.heuristic)
        self.max_nodes_expanded = search_cfg.get('max_nodes_expanded')
        self.max_computation_time = search_cfg.get('max_computation_time')
        self.max_workers = self.config.get('batch', {}).get('max_workers', 1)

    def solve(self, start: Optional[Grid] = None, goal: Optional[Grid] = None,
              method: Optional[HeuristicMethod] = None,
              max_nodes_expanded: Optional[int] = None,
              max_computation_time: Optional[float] = None) -> SearchOutcome:
        """Solve one puzzle, filling unspecified arguments from configuration."""
        searcher = create_astar_searcher(
            heuristic=method if method is not None else self.method,
            max_nodes_expanded=(max_nodes_expanded if max_nodes_expanded is not None
                                else self.max_nodes_expanded),
            max_computation_time=(max_computation_time if max_computation_time is not None
                                  else self.max_computation_time)
        )
        return searcher.search(start if start is not None else self.default_start,
                               goal if goal is not None else self.goal)

    def solve_many(self, puzzles: Sequence[Tuple[Grid, Optional[Grid]]],
                   method: Optional[HeuristicMethod] = None,
                   max_workers: Optional[int] = None) -> List[SearchOutcome]:
        """Solve a batch of (start, goal) pairs; a None goal means the configured goal."""
        resolved = [(start, goal if goal is not None else self.goal) for start, goal in puzzles]
        return solve_batch(
            resolved,
            method=method if method is not None else self.method,
            max_workers=max_workers if max_workers is not None else self.max_workers,
            max_nodes_expanded=self.max_nodes_expanded,
            max_computation_time=self.max_computation_time
        )


def _config_overrides(args) -> List[str]:
    return list(getattr(args, 'config', None) or [])


def _print_outcome_summary(result: Dict[str, Any]) -> None:
    print(f"\nSuccess: {result['success']}")
    if result['success']:
        print(f"Solution depth: {result['depth']}")
    else:
        print(f"Termination: {result['termination_reason']}")
    print(f"Nodes expanded: {result['nodes_expanded']}")
    print(f"Max frontier size: {result['max_frontier_size']}")
    print(f"Computation time: {format_duration(result['computation_time'])}")
    if result['success']:
        print("Solution path:")
        for grid in result['path']:
            print(format_grid(grid))
            print()


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        start = parse_grid(args.start) if args.start else None
        goal = parse_grid(args.goal) if args.goal else None
        method = HeuristicMethod.parse(args.method) if args.method else None

        solver = PuzzleSolver(_config_overrides(args))

        logger.info("Solving puzzle...")
        start_time = time.perf_counter()
        outcome = solver.solve(start, goal, method=method,
                               max_nodes_expanded=args.max_nodes,
                               max_computation_time=args.timeout)
        total_time = time.perf_counter() - start_time

        result = outcome.to_dict()
        result.update({
            'method': (method if method is not None else solver.method).value,
            'total_time': total_time
        })

        # JSON goes to --output, or to stdout in quiet mode; otherwise the readable summary
        if args.output:
            save_results(result, args.output)
            logger.info(f"Results saved to {args.output}")
        elif args.quiet:
            print(json.dumps(result, indent=2))

        if not args.quiet:
            _print_outcome_summary(result)

        return 0 if outcome.success else 1

    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def batch_command(args) -> int:
    """Handle batch command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        puzzles = load_puzzles_from_file(args.input_path)
        method = HeuristicMethod.parse(args.method) if args.method else None

        solver = PuzzleSolver(_config_overrides(args))
        logger.info(f"Loaded {len(puzzles)} puzzles from {args.input_path}")

        outcomes = solver.solve_many(puzzles, method=method, max_workers=args.threads)

        results = []
        for index, outcome in enumerate(outcomes):
            result = outcome.to_dict()
            result['index'] = index
            results.append(result)

        summary = create_result_summary(results)

        if args.output:
            save_results({'results': results, 'summary': summary}, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print_summary(summary)

        return 0 if summary['unsolved_puzzles'] == 0 else 1

    except Exception as e:
        logger.error(f"Batch command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=_config_overrides(args), validate=False)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                load_config(overrides=_config_overrides(args))
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
