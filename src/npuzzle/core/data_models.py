"""Core data models for the N-puzzle solver."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union
import numpy as np

# Fixed dtype so that equal configurations always serialize to equal keys
TILE_DTYPE = np.int32
BLANK = 0


class InvalidGrid(ValueError):
    """Raised when a grid is not a square permutation of 0..n²-1."""
    pass


class Direction(Enum):
    """Blank-tile moves as (row, col) offsets, in expansion order."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value


def validate_grid(grid: "Grid") -> np.ndarray:
    """Check that ``grid`` is a well-formed puzzle grid.

    Args:
        grid: Nested sequence or 2D integer array

    Returns:
        Read-only ``TILE_DTYPE`` copy of the grid

    Raises:
        InvalidGrid: If the grid is ragged, non-square, smaller than 2x2,
            non-integer, or not a permutation of 0..n²-1
    """
    try:
        array = np.asarray(grid)
    except (TypeError, ValueError) as e:
        raise InvalidGrid(f"Grid is not rectangular: {e}")

    if array.ndim != 2:
        raise InvalidGrid(f"Grid must be 2D, got {array.ndim} dimensions")

    rows, cols = array.shape
    if rows != cols:
        raise InvalidGrid(f"Grid must be square, got shape {array.shape}")
    if rows < 2:
        raise InvalidGrid(f"Grid dimension must be at least 2, got {rows}")
    if array.dtype.kind not in ('i', 'u'):
        raise InvalidGrid(f"Grid must contain integers, got dtype {array.dtype}")

    expected = np.arange(rows * cols)
    if not np.array_equal(np.sort(array, axis=None), expected):
        raise InvalidGrid(
            f"Grid must be a permutation of 0..{rows * cols - 1}, got {array.tolist()}"
        )

    validated = array.astype(TILE_DTYPE, copy=True)
    validated.flags.writeable = False
    return validated


@dataclass(frozen=True, eq=False)
class State:
    """Immutable puzzle configuration with a cached blank position.

    Equality and hashing go through ``key``, the canonical byte
    serialization of the row-major cells.
    """

    grid: np.ndarray
    blank_row: int
    blank_col: int
    key: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'key', self.grid.tobytes())

    @classmethod
    def from_grid(cls, grid: "Grid") -> "State":
        """Build a state from a nested sequence or array, validating it."""
        array = validate_grid(grid)
        blank_index = int(np.flatnonzero(array == BLANK)[0])
        row, col = divmod(blank_index, array.shape[0])
        return cls(grid=array, blank_row=row, blank_col=col)

    @property
    def dimension(self) -> int:
        return self.grid.shape[0]

    @property
    def cells(self) -> Tuple[int, ...]:
        """Row-major tile labels."""
        return tuple(self.grid.ravel().tolist())

    def to_grid(self) -> List[List[int]]:
        return self.grid.tolist()

    def move(self, direction: Direction) -> Optional["State"]:
        """Slide the blank one step, or return None if it would leave the grid."""
        d_row, d_col = direction.offset
        new_row = self.blank_row + d_row
        new_col = self.blank_col + d_col
        n = self.dimension
        if not (0 <= new_row < n and 0 <= new_col < n):
            return None

        new_grid = self.grid.copy()
        new_grid[self.blank_row, self.blank_col] = new_grid[new_row, new_col]
        new_grid[new_row, new_col] = BLANK
        new_grid.flags.writeable = False
        return State(grid=new_grid, blank_row=new_row, blank_col=new_col)

    def successors_with_moves(self) -> Iterator[Tuple[Direction, "State"]]:
        """Yield (direction, state) for each legal blank move."""
        for direction in Direction:
            successor = self.move(direction)
            if successor is not None:
                yield direction, successor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return "\n".join(" ".join(str(tile) for tile in row) for row in self.to_grid())


def successors(state: State) -> Iterator[State]:
    """Lazily generate the states reachable by one blank move (up, down, left, right)."""
    for _, successor in state.successors_with_moves():
        yield successor


def as_state(grid: Union[State, "Grid"]) -> State:
    """Return ``grid`` as a State, validating raw grids."""
    if isinstance(grid, State):
        return grid
    return State.from_grid(grid)


# Type aliases for clarity
Grid = Union[np.ndarray, Sequence[Sequence[int]]]  # dimension x dimension tile labels
