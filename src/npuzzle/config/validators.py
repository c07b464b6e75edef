"""Configuration validation for the N-puzzle solver."""

import logging
from typing import Any, Optional
from omegaconf import DictConfig, ListConfig, OmegaConf

from npuzzle.core.data_models import InvalidGrid, State
from npuzzle.search.heuristics import HeuristicMethod

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_puzzle_config(config.get('puzzle', {}))
        validate_search_config(config.get('search', {}))
        validate_batch_config(config.get('batch', {}))

        logger.debug("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def _grid_state(name: str, value: Any) -> State:
    if isinstance(value, (DictConfig, ListConfig)):
        value = OmegaConf.to_container(value, resolve=True)
    try:
        return State.from_grid(value)
    except InvalidGrid as e:
        raise ConfigValidationError(f"puzzle.{name} is not a valid grid: {e}")


def _positive_or_none(name: str, value: Any, kinds: tuple) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, kinds) or value <= 0:
        raise ConfigValidationError(f"{name} must be positive or null, got {value}")


def validate_puzzle_config(puzzle_config: Optional[DictConfig]) -> None:
    """Validate puzzle configuration section.

    Args:
        puzzle_config: Puzzle configuration section
    """
    if not puzzle_config:
        return

    dimension = puzzle_config.get('dimension', 3)
    if isinstance(dimension, bool) or not isinstance(dimension, int) or dimension < 2:
        raise ConfigValidationError(
            f"puzzle.dimension must be an integer of at least 2, got {dimension}"
        )

    for name in ('goal', 'default_start'):
        value = puzzle_config.get(name)
        if value is None:
            continue
        state = _grid_state(name, value)
        if state.dimension != dimension:
            raise ConfigValidationError(
                f"puzzle.{name} is {state.dimension}x{state.dimension} "
                f"but puzzle.dimension is {dimension}"
            )


def validate_search_config(search_config: Optional[DictConfig]) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    heuristic = search_config.get('heuristic', HeuristicMethod.MANHATTAN_DISTANCE.value)
    try:
        HeuristicMethod.parse(heuristic)
    except ValueError as e:
        raise ConfigValidationError(f"search.heuristic is invalid: {e}")

    _positive_or_none('search.max_nodes_expanded',
                      search_config.get('max_nodes_expanded'), (int,))
    _positive_or_none('search.max_computation_time',
                      search_config.get('max_computation_time'), (int, float))


def validate_batch_config(batch_config: Optional[DictConfig]) -> None:
    """Validate batch configuration section.

    Args:
        batch_config: Batch configuration section
    """
    if not batch_config:
        return

    max_workers = batch_config.get('max_workers', 1)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise ConfigValidationError(
            f"batch.max_workers must be a positive integer, got {max_workers}"
        )
