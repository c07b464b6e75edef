"""A* search algorithm for the N-puzzle.

This module implements best-first graph search over sliding-tile
configurations. Nodes are ordered by f = g + h with FIFO tie-breaking;
a cheaper path to a state still in the frontier replaces its node
(decrease-key), and expanded states are never reopened. The latter
assumes a consistent heuristic, which holds for every built-in strategy.
"""

import logging
import time
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from npuzzle.core.data_models import Direction, Grid, InvalidGrid, State, as_state
from npuzzle.search.frontier import EmptyFrontier, Frontier
from npuzzle.search.heuristics import (
    HeuristicFunction, HeuristicMethod, create_heuristic
)
from npuzzle.search.visited import VisitedTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SearchNode:
    """Node in the A* search tree.

    The parent is fixed at creation. A cheaper path to the same state
    produces a new node rather than rewiring this one.
    """
    state: State
    g: int  # path cost from start
    h: int  # heuristic estimate to goal
    parent: Optional['SearchNode'] = None
    move: Optional[Direction] = None  # blank move that produced this node

    @property
    def f(self) -> int:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.g + self.h

    @property
    def key(self) -> bytes:
        return self.state.key

    def get_path(self) -> List[State]:
        """States from the root to this node."""
        states = []
        node = self
        while node is not None:
            states.append(node.state)
            node = node.parent
        return list(reversed(states))

    def get_moves(self) -> List[Direction]:
        """Blank moves from the root to this node."""
        moves = []
        node = self
        while node.parent is not None:
            moves.append(node.move)
            node = node.parent
        return list(reversed(moves))


class SearchStatus(Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    heuristic: HeuristicMethod = HeuristicMethod.MANHATTAN_DISTANCE
    max_nodes_expanded: Optional[int] = None  # None searches exhaustively
    max_computation_time: Optional[float] = None  # seconds, None for no limit


@dataclass
class SearchStatistics:
    """Detailed search statistics."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicate_states: int = 0  # rediscoveries that did not improve the cost
    cost_updates: int = 0  # decrease-key operations
    stale_entries_skipped: int = 0
    max_frontier_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SearchOutcome:
    """Result of one search run."""
    nodes_expanded: int
    max_frontier_size: int
    nodes_generated: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"

    success: ClassVar[bool] = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dictionary."""
        result = asdict(self)
        result['success'] = self.success
        return result


@dataclass
class SearchSuccess(SearchOutcome):
    """Goal reached; ``path`` runs from start to goal inclusive."""
    path: List[List[List[int]]] = field(default_factory=list)
    depth: int = 0
    moves: List[Direction] = field(default_factory=list)

    success: ClassVar[bool] = True

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result['moves'] = [move.name.lower() for move in self.moves]
        return result


@dataclass
class NoSolution(SearchOutcome):
    """Search ended without reaching the goal."""
    pass


class AStarSearcher:
    """Best-first graph search with decrease-key over puzzle states."""

    def __init__(self, config: Optional[SearchConfig] = None,
                 heuristic: Optional[HeuristicFunction] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
            heuristic: Optional ``(state, goal) -> int`` function used instead
                of ``config.heuristic``. Closed states are never reopened, so
                it should be consistent for results to be optimal.
        """
        config = config or SearchConfig()
        self.config = replace(config, heuristic=HeuristicMethod.parse(config.heuristic))
        self.custom_heuristic = heuristic
        self.statistics = SearchStatistics()
        self.status = SearchStatus.INITIALIZED
        self.heuristic_stats: Dict[str, Any] = {}

        logger.debug(f"A* searcher initialized with heuristic={self.config.heuristic.value}, "
                     f"max_nodes={self.config.max_nodes_expanded}, "
                     f"max_time={self.config.max_computation_time}")

    def search(self, start: Union[State, Grid], goal: Union[State, Grid]) -> SearchOutcome:
        """Search for a minimum-length move sequence from start to goal.

        Args:
            start: Starting configuration
            goal: Goal configuration of the same dimension

        Returns:
            SearchSuccess with the path, or NoSolution

        Raises:
            InvalidGrid: If either grid is malformed or the dimensions differ
        """
        start_time = time.perf_counter()
        start_state = as_state(start)
        goal_state = as_state(goal)
        if start_state.dimension != goal_state.dimension:
            raise InvalidGrid(
                f"Start is {start_state.dimension}x{start_state.dimension} but goal is "
                f"{goal_state.dimension}x{goal_state.dimension}"
            )

        if self.custom_heuristic is not None:
            custom = self.custom_heuristic
            heuristic: Callable[[State], int] = lambda state: custom(state, goal_state)
        else:
            heuristic = create_heuristic(goal_state, self.config.heuristic)

        self.statistics = SearchStatistics()
        stats = self.statistics
        frontier = Frontier()
        table = VisitedTable()

        root = SearchNode(state=start_state, g=0, h=heuristic(start_state))
        frontier.insert(root)
        table.record_open(root.key, 0)
        stats.max_frontier_size = 1

        logger.info(f"Starting A* search on {start_state.dimension}x{start_state.dimension} puzzle "
                    f"(h0={root.h})")
        self.status = SearchStatus.RUNNING
        deadline = (start_time + self.config.max_computation_time
                    if self.config.max_computation_time is not None else None)
        trace = logger.isEnabledFor(logging.DEBUG)

        while True:
            if (self.config.max_nodes_expanded is not None and
                    stats.nodes_expanded >= self.config.max_nodes_expanded):
                return self._finish_failed(start_time, "max_nodes_reached", heuristic)
            if deadline is not None and time.perf_counter() > deadline:
                return self._finish_failed(start_time, "timeout", heuristic)

            try:
                current = frontier.extract_min()
            except EmptyFrontier:
                return self._finish_failed(start_time, "search_exhausted", heuristic)

            entry = table.get(current.key)
            if entry.is_closed and entry.cost < current.g:
                stats.stale_entries_skipped += 1
                continue

            table.close(current.key)
            stats.nodes_expanded += 1

            if trace:
                logger.debug(f"The best state to expand with g(n)={current.g}, h(n)={current.h}:\n"
                             f"{current.state}")

            if current.state == goal_state:
                return self._finish_succeeded(current, start_time, heuristic)

            successor_cost = current.g + 1
            for move, successor in current.state.successors_with_moves():
                stats.nodes_generated += 1
                key = successor.key
                entry = table.get(key)

                if entry is None:
                    child = SearchNode(state=successor, g=successor_cost, h=heuristic(successor),
                                       parent=current, move=move)
                    frontier.insert(child)
                    table.record_open(key, successor_cost)
                    stats.max_frontier_size = max(stats.max_frontier_size, len(frontier))
                elif entry.is_closed or entry.cost <= successor_cost:
                    stats.duplicate_states += 1
                else:
                    stale = frontier.get(key)
                    child = SearchNode(state=successor, g=successor_cost, h=heuristic(successor),
                                       parent=current, move=move)
                    frontier.decrease_key(stale, child)
                    table.update_cost(key, successor_cost)
                    stats.cost_updates += 1

    def _collect_heuristic_stats(self, heuristic: Callable[[State], int]) -> None:
        get_stats = getattr(heuristic, 'get_stats', None)
        self.heuristic_stats = get_stats() if get_stats is not None else {}

    def _finish_succeeded(self, node: SearchNode, start_time: float,
                          heuristic: Callable[[State], int]) -> SearchSuccess:
        """Create successful search result."""
        self.status = SearchStatus.SUCCEEDED
        self._collect_heuristic_stats(heuristic)
        computation_time = time.perf_counter() - start_time

        logger.info(f"Goal reached at depth {node.g}: {self.statistics.nodes_expanded} nodes expanded, "
                    f"max frontier {self.statistics.max_frontier_size}, {computation_time:.3f}s")

        return SearchSuccess(
            nodes_expanded=self.statistics.nodes_expanded,
            max_frontier_size=self.statistics.max_frontier_size,
            nodes_generated=self.statistics.nodes_generated,
            computation_time=computation_time,
            termination_reason="goal_reached",
            path=[state.to_grid() for state in node.get_path()],
            depth=node.g,
            moves=node.get_moves()
        )

    def _finish_failed(self, start_time: float, termination_reason: str,
                       heuristic: Callable[[State], int]) -> NoSolution:
        """Create result for a search that ended without reaching the goal."""
        self.status = SearchStatus.FAILED
        self._collect_heuristic_stats(heuristic)
        computation_time = time.perf_counter() - start_time

        logger.info(f"No solution ({termination_reason}) after {self.statistics.nodes_expanded} "
                    f"nodes expanded")

        return NoSolution(
            nodes_expanded=self.statistics.nodes_expanded,
            max_frontier_size=self.statistics.max_frontier_size,
            nodes_generated=self.statistics.nodes_generated,
            computation_time=computation_time,
            termination_reason=termination_reason
        )

    def get_search_stats(self) -> Dict[str, Any]:
        """Get detailed statistics of the most recent search."""
        return {
            'status': self.status.value,
            'statistics': self.statistics.to_dict(),
            'heuristic_stats': self.heuristic_stats,
            'config': {
                'heuristic': self.config.heuristic.value,
                'max_nodes_expanded': self.config.max_nodes_expanded,
                'max_computation_time': self.config.max_computation_time
            }
        }


def create_astar_searcher(heuristic: Union[HeuristicMethod, str, int] = HeuristicMethod.MANHATTAN_DISTANCE,
                          max_nodes_expanded: Optional[int] = None,
                          max_computation_time: Optional[float] = None) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        heuristic: Heuristic strategy or selector
        max_nodes_expanded: Optional cap on expansions
        max_computation_time: Optional time limit in seconds

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        heuristic=HeuristicMethod.parse(heuristic),
        max_nodes_expanded=max_nodes_expanded,
        max_computation_time=max_computation_time
    )

    return AStarSearcher(config)


def solve(start: Union[State, Grid], goal: Union[State, Grid],
          method: Union[HeuristicMethod, str, int] = HeuristicMethod.MANHATTAN_DISTANCE,
          max_nodes_expanded: Optional[int] = None,
          max_computation_time: Optional[float] = None) -> SearchOutcome:
    """Solve one puzzle instance.

    Each call builds its own searcher, frontier and visited table, so
    repeated calls with the same arguments give identical results.
    """
    searcher = create_astar_searcher(method, max_nodes_expanded, max_computation_time)
    return searcher.search(start, goal)
