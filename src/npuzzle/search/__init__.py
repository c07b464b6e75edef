"""Search algorithms for the N-puzzle solver.

This module implements best-first graph search (A* / uniform-cost) with
pluggable heuristics over sliding-tile configurations.
"""

from .heuristics import HeuristicMethod, GoalHeuristic, estimate, create_heuristic
from .frontier import Frontier, EmptyFrontier
from .visited import VisitedTable, TableEntry, NodeStatus
from .astar import (
    AStarSearcher, SearchNode, SearchConfig, SearchStatistics, SearchStatus,
    SearchOutcome, SearchSuccess, NoSolution, create_astar_searcher, solve
)
from .batch import solve_batch

__all__ = [
    'HeuristicMethod',
    'GoalHeuristic',
    'estimate',
    'create_heuristic',
    'Frontier',
    'EmptyFrontier',
    'VisitedTable',
    'TableEntry',
    'NodeStatus',
    'AStarSearcher',
    'SearchNode',
    'SearchConfig',
    'SearchStatistics',
    'SearchStatus',
    'SearchOutcome',
    'SearchSuccess',
    'NoSolution',
    'create_astar_searcher',
    'solve',
    'solve_batch'
]
