"""Command-line interface for the N-puzzle solver.

This module provides CLI commands for solving single puzzles and batches.
"""

from .main import main_cli
from .commands import solve_command, batch_command, config_command, PuzzleSolver
from .utils import setup_logging, parse_grid, load_puzzles_from_file, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'batch_command',
    'config_command',
    'PuzzleSolver',
    'setup_logging',
    'parse_grid',
    'load_puzzles_from_file',
    'save_results'
]
