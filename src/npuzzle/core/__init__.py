"""Puzzle state representation and move generation."""

from .data_models import (
    State, Direction, InvalidGrid, Grid, validate_grid, successors, as_state, BLANK
)

__all__ = [
    'State',
    'Direction',
    'InvalidGrid',
    'Grid',
    'validate_grid',
    'successors',
    'as_state',
    'BLANK'
]
