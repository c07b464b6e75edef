"""Batch solving of independent puzzle instances."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

from npuzzle.core.data_models import Grid, InvalidGrid, State, as_state
from npuzzle.search.astar import SearchOutcome, create_astar_searcher
from npuzzle.search.heuristics import HeuristicMethod

logger = logging.getLogger(__name__)

Puzzle = Tuple[Union[State, Grid], Union[State, Grid]]  # (start, goal)


def solve_batch(puzzles: Sequence[Puzzle],
                method: Union[HeuristicMethod, str, int] = HeuristicMethod.MANHATTAN_DISTANCE,
                max_workers: int = 1,
                max_nodes_expanded: Optional[int] = None,
                max_computation_time: Optional[float] = None) -> List[SearchOutcome]:
    """Solve many puzzles, each with its own searcher.

    Args:
        puzzles: (start, goal) pairs
        method: Heuristic strategy for every puzzle
        max_workers: Number of worker threads
        max_nodes_expanded: Optional per-puzzle expansion cap
        max_computation_time: Optional per-puzzle time limit in seconds

    Returns:
        Outcomes in the same order as ``puzzles``

    Raises:
        InvalidGrid: If any puzzle is malformed; raised before any search starts
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    method = HeuristicMethod.parse(method)
    validated = []
    for index, (start, goal) in enumerate(puzzles):
        try:
            validated.append((as_state(start), as_state(goal)))
        except InvalidGrid as e:
            raise InvalidGrid(f"Puzzle {index}: {e}")

    logger.info(f"Solving {len(validated)} puzzles with {method.value} "
                f"using {max_workers} worker(s)")

    def solve_one(puzzle: Tuple[State, State]) -> SearchOutcome:
        searcher = create_astar_searcher(method, max_nodes_expanded, max_computation_time)
        return searcher.search(*puzzle)

    if max_workers == 1:
        return [solve_one(puzzle) for puzzle in validated]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(solve_one, puzzle) for puzzle in validated]
        return [future.result() for future in futures]
