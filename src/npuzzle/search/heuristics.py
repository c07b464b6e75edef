"""Heuristic strategies for best-first puzzle search.

Three strategies are available, selected through the closed
``HeuristicMethod`` enumeration:
- uniform cost: always 0 (Dijkstra over unit-cost moves)
- misplaced tiles: number of non-blank tiles out of place
- Manhattan distance: summed row and column offsets of non-blank tiles

Misplaced tiles and Manhattan distance are admissible and consistent for
unit-cost moves, and Manhattan distance dominates misplaced tiles.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Tuple, Union
import numpy as np

from npuzzle.core.data_models import BLANK, State

logger = logging.getLogger(__name__)

HeuristicFunction = Callable[[State, State], int]


class HeuristicMethod(str, Enum):
    """Closed set of heuristic strategies."""

    UNIFORM_COST = "uniform_cost"
    MISPLACED_TILES = "misplaced_tiles"
    MANHATTAN_DISTANCE = "manhattan_distance"

    @classmethod
    def parse(cls, selector: Union["HeuristicMethod", str, int]) -> "HeuristicMethod":
        """Resolve a heuristic selector.

        Accepts enum members, values (``"manhattan_distance"``), names,
        hyphenated or spaced spellings (``"misplaced-tiles"``) and the
        numeric menu selectors 1 (uniform cost), 2 (misplaced tiles)
        and 3 (Manhattan distance).

        Raises:
            ValueError: If the selector names no known strategy
        """
        if isinstance(selector, cls):
            return selector

        if isinstance(selector, int) and not isinstance(selector, bool):
            if selector in _NUMERIC_SELECTORS:
                return _NUMERIC_SELECTORS[selector]
            raise ValueError(f"Unknown heuristic selector: {selector!r}")

        if isinstance(selector, str):
            normalized = selector.strip().lower().replace('-', '_').replace(' ', '_')
            if normalized.isdigit():
                return cls.parse(int(normalized))
            for method in cls:
                if normalized in (method.value, method.name.lower()):
                    return method

        raise ValueError(f"Unknown heuristic method: {selector!r}")


_NUMERIC_SELECTORS = {
    1: HeuristicMethod.UNIFORM_COST,
    2: HeuristicMethod.MISPLACED_TILES,
    3: HeuristicMethod.MANHATTAN_DISTANCE,
}


def goal_positions(goal: State) -> Tuple[np.ndarray, np.ndarray]:
    """Return (rows, cols) arrays indexed by tile label giving its goal position."""
    positions = np.argsort(goal.grid, axis=None)
    return np.divmod(positions, goal.dimension)


def uniform_cost(state: State, goal: State) -> int:
    """Zero heuristic."""
    return 0


def misplaced_tiles(state: State, goal: State) -> int:
    """Count non-blank tiles whose label differs from the goal's at that cell."""
    misplaced = (state.grid != goal.grid) & (state.grid != BLANK)
    return int(np.count_nonzero(misplaced))


def manhattan_distance(state: State, goal: State) -> int:
    """Sum of |Δrow| + |Δcol| between each non-blank tile and its goal cell."""
    goal_rows, goal_cols = goal_positions(goal)
    rows, cols = np.indices(state.grid.shape)
    return _manhattan(state.grid, rows, cols, goal_rows, goal_cols)


def _manhattan(tiles: np.ndarray, rows: np.ndarray, cols: np.ndarray,
               goal_rows: np.ndarray, goal_cols: np.ndarray) -> int:
    mask = tiles != BLANK
    labels = tiles[mask]
    distance = (np.abs(rows[mask] - goal_rows[labels]) +
                np.abs(cols[mask] - goal_cols[labels]))
    return int(distance.sum())


_HEURISTIC_FUNCTIONS: Dict[HeuristicMethod, HeuristicFunction] = {
    HeuristicMethod.UNIFORM_COST: uniform_cost,
    HeuristicMethod.MISPLACED_TILES: misplaced_tiles,
    HeuristicMethod.MANHATTAN_DISTANCE: manhattan_distance,
}


def estimate(state: State, goal: State,
             method: Union[HeuristicMethod, str, int] = HeuristicMethod.MANHATTAN_DISTANCE) -> int:
    """Estimate the remaining number of moves from ``state`` to ``goal``.

    Args:
        state: Current state
        goal: Goal state of the same dimension
        method: Heuristic strategy or selector accepted by ``HeuristicMethod.parse``

    Returns:
        Non-negative integer lower bound (0 for uniform cost)
    """
    return _HEURISTIC_FUNCTIONS[HeuristicMethod.parse(method)](state, goal)


class GoalHeuristic:
    """Heuristic bound to a fixed goal, with per-goal lookup tables precomputed.

    Instances are callables ``state -> int`` and keep evaluation statistics.
    """

    def __init__(self, goal: State,
                 method: Union[HeuristicMethod, str, int] = HeuristicMethod.MANHATTAN_DISTANCE):
        """Initialize heuristic.

        Args:
            goal: Goal state every estimate is measured against
            method: Heuristic strategy
        """
        self.goal = goal
        self.method = HeuristicMethod.parse(method)
        self.computation_count = 0
        self.total_computation_time = 0.0

        self._goal_rows, self._goal_cols = goal_positions(goal)
        self._rows, self._cols = np.indices(goal.grid.shape)

        # Same keys as _HEURISTIC_FUNCTIONS; Manhattan reuses the precomputed tables
        compute_functions: Dict[HeuristicMethod, Callable[[State], int]] = {
            HeuristicMethod.UNIFORM_COST: self._uniform_cost,
            HeuristicMethod.MISPLACED_TILES: self._misplaced_tiles,
            HeuristicMethod.MANHATTAN_DISTANCE: self._manhattan_distance,
        }
        self.compute: Callable[[State], int] = compute_functions[self.method]

    def _uniform_cost(self, state: State) -> int:
        return uniform_cost(state, self.goal)

    def _misplaced_tiles(self, state: State) -> int:
        return misplaced_tiles(state, self.goal)

    def _manhattan_distance(self, state: State) -> int:
        return _manhattan(state.grid, self._rows, self._cols,
                          self._goal_rows, self._goal_cols)

    def __call__(self, state: State) -> int:
        """Compute heuristic with timing and statistics."""
        start_time = time.perf_counter()
        value = self.compute(state)
        self.computation_count += 1
        self.total_computation_time += time.perf_counter() - start_time
        return value

    def get_stats(self) -> Dict[str, Any]:
        """Get computation statistics."""
        avg_time = (self.total_computation_time / self.computation_count
                    if self.computation_count > 0 else 0.0)

        return {
            'name': self.method.value,
            'computation_count': self.computation_count,
            'total_time': self.total_computation_time,
            'average_time_us': avg_time * 1000000
        }


def create_heuristic(goal: State,
                     method: Union[HeuristicMethod, str, int] = HeuristicMethod.MANHATTAN_DISTANCE
                     ) -> GoalHeuristic:
    """Factory function to create a goal-bound heuristic.

    Args:
        goal: Goal state
        method: Heuristic strategy or selector

    Returns:
        Configured GoalHeuristic instance
    """
    heuristic = GoalHeuristic(goal, method)
    logger.debug(f"Created {heuristic.method.value} heuristic for {goal.dimension}x{goal.dimension} goal")
    return heuristic
