"""CLI utility functions."""

import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from npuzzle.core.data_models import InvalidGrid


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
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra logs its own composition details at INFO
    logging.getLogger('hydra').setLevel(logging.WARNING)


def parse_grid(text: str) -> List[List[int]]:
    """Parse a grid given on the command line.

    Accepts a JSON nested list (``"[[1,2,3],[4,5,6],[7,8,0]]"``) or a flat
    row-major list of labels separated by spaces, commas or semicolons
    (``"1 2 3 4 5 6 7 8 0"``). The flat form must hold a square number
    of labels.

    Raises:
        InvalidGrid: If the text cannot be read as a square grid of integers
    """
    text = text.strip()
    if text.startswith('['):
        try:
            grid = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidGrid(f"Invalid JSON grid {text!r}: {e}")
        if not isinstance(grid, list) or not all(isinstance(row, list) for row in grid):
            raise InvalidGrid(f"JSON grid must be a list of rows, got {text!r}")
        return grid

    tokens = [token for token in re.split(r'[\s,;]+', text) if token]
    try:
        labels = [int(token) for token in tokens]
    except ValueError:
        raise InvalidGrid(f"Grid labels must be integers, got {text!r}")

    dimension = math.isqrt(len(labels))
    if dimension * dimension != len(labels) or dimension < 2:
        raise InvalidGrid(f"Expected a square number of labels, got {len(labels)}")

    return [labels[row * dimension:(row + 1) * dimension] for row in range(dimension)]


def load_puzzles_from_file(file_path: Union[str, Path]) -> List[Tuple[Any, Optional[Any]]]:
    """Load puzzles for batch solving from a JSON file.

    The file holds a list of objects with a ``start`` grid and an optional
    ``goal`` grid.

    Returns:
        List of (start, goal) pairs, goal None when not given

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}")

    if not isinstance(data, list):
        raise ValueError(f"{file_path} must contain a list of puzzles")

    puzzles = []
    for index, item in enumerate(data):
        if not isinstance(item, dict) or 'start' not in item:
            raise ValueError(f"Puzzle {index} in {file_path} has no 'start' grid")
        puzzles.append((item['start'], item.get('goal')))

    return puzzles


def save_results(results: Union[Dict[str, Any], List[Any]],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary or list
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True)
        else:
            json.dump(results, f)


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


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join(" ".join(str(tile) for tile in row) for row in grid)


def create_result_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Create summary statistics from batch results.

    Args:
        results: List of individual outcome dictionaries

    Returns:
        Summary statistics dictionary
    """
    if not results:
        return {
            'total_puzzles': 0,
            'solved_puzzles': 0,
            'unsolved_puzzles': 0,
            'success_rate': 0.0,
            'total_nodes_expanded': 0,
            'average_depth': 0.0,
            'total_time': 0.0
        }

    solved = [r for r in results if r.get('success', False)]
    total = len(results)

    return {
        'total_puzzles': total,
        'solved_puzzles': len(solved),
        'unsolved_puzzles': total - len(solved),
        'success_rate': len(solved) / total,
        'total_nodes_expanded': sum(r.get('nodes_expanded', 0) for r in results),
        'average_depth': (sum(r['depth'] for r in solved) / len(solved)) if solved else 0.0,
        'total_time': sum(r.get('computation_time', 0.0) for r in results)
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print batch processing summary."""
    print("\n" + "=" * 60)
    print("BATCH SUMMARY")
    print("=" * 60)
    print(f"Total puzzles:    {summary['total_puzzles']}")
    print(f"Solved:           {summary['solved_puzzles']} ({summary['success_rate']*100:.1f}%)")
    print(f"Unsolved:         {summary['unsolved_puzzles']}")
    print(f"Nodes expanded:   {summary['total_nodes_expanded']}")
    print(f"Average depth:    {summary['average_depth']:.2f}")
    print(f"Total time:       {format_duration(summary['total_time'])}")
