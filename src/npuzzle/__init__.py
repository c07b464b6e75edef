"""N-puzzle solver: best-first graph search over sliding-tile puzzles."""

from npuzzle.core.data_models import State, Direction, InvalidGrid, successors
from npuzzle.search.heuristics import HeuristicMethod, estimate
from npuzzle.search.astar import SearchOutcome, SearchSuccess, NoSolution, solve
from npuzzle.search.batch import solve_batch

__version__ = "0.1.0"

__all__ = [
    'State',
    'Direction',
    'InvalidGrid',
    'successors',
    'HeuristicMethod',
    'estimate',
    'SearchOutcome',
    'SearchSuccess',
    'NoSolution',
    'solve',
    'solve_batch'
]
