"""Immutable grid state for Conway's Game of Life boards.

A Grid holds one generation of a board as a read-only 2D numpy boolean
array. Grids are never modified after construction: every transition
produces a new Grid, so values can be shared freely between the store,
the simulation driver and API callers.
"""

import numpy as np
from typing import Any, List, Optional, Sequence, Tuple

from ..errors import InputError, ShapeError


class Grid:
    """Rectangular boolean matrix representing one generation.

    Attributes:
        rows: Number of rows (>= 0)
        cols: Number of columns (>= 0)
        state: Read-only 2D numpy boolean array (True=alive, False=dead)
    """

    __slots__ = ('rows', 'cols', '_state')

    def __init__(self, rows: int, cols: int, initial_state: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Args:
            rows: Number of rows
            cols: Number of columns
            initial_state: Optional boolean array of shape (rows, cols)

        Raises:
            ShapeError: If dimensions are negative or initial_state doesn't match
        """
        if rows < 0 or cols < 0:
            raise ShapeError(f"Grid dimensions must be non-negative, got {rows}x{cols}")

        if initial_state is not None:
            if initial_state.shape != (rows, cols):
                raise ShapeError(f"Initial state shape {initial_state.shape} doesn't match grid size {(rows, cols)}")
            if initial_state.dtype != bool:
                raise ShapeError("Initial state must be boolean array")
            state = initial_state.copy()
        else:
            state = np.zeros((rows, cols), dtype=bool)

        state.setflags(write=False)
        self.rows = rows
        self.cols = cols
        self._state = state

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Grid':
        """Create grid from a 2D numpy boolean array (copied)."""
        if array.ndim != 2:
            raise ShapeError(f"Grid array must be 2-dimensional, got {array.ndim} dimensions")
        rows, cols = array.shape
        return cls(rows, cols, array)

    @classmethod
    def from_rows(cls, rows: Any) -> 'Grid':
        """Create grid from a row-major array-of-arrays of booleans.

        This is the conversion used at every external boundary (HTTP bodies,
        JSON snapshots). Jagged input is rejected, never padded or truncated.

        Args:
            rows: Sequence of rows, each a sequence of booleans

        Returns:
            Grid: New grid holding the given cells

        Raises:
            InputError: If rows is None
            ShapeError: If rows are not all the same length or a cell isn't boolean
        """
        if rows is None:
            raise InputError("Grid must be provided")
        if isinstance(rows, Grid):
            return rows
        if isinstance(rows, np.ndarray):
            if rows.dtype != bool:
                raise ShapeError("Grid cells must be boolean")
            return cls.from_array(rows)
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise ShapeError("Grid must be a sequence of rows")

        height = len(rows)
        width = None
        for r, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, (Sequence, np.ndarray)):
                raise ShapeError(f"Row {r} is not a sequence of cells")
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise ShapeError(f"Grid is not rectangular: row {r} has length {len(row)}, expected {width}")

        state = np.zeros((height, width or 0), dtype=bool)
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                if not isinstance(cell, (bool, np.bool_)):
                    raise ShapeError(f"Cell ({r}, {c}) must be boolean, got {type(cell).__name__}")
                state[r, c] = cell

        return cls(height, width or 0, state)

    def to_rows(self) -> List[List[bool]]:
        """Convert to row-major nested lists of plain booleans."""
        return [[bool(cell) for cell in row] for row in self._state]

    def to_array(self) -> np.ndarray:
        """Get a writable copy of the cell array."""
        return self._state.copy()

    @property
    def state(self) -> np.ndarray:
        """Read-only view of the cell array."""
        return self._state

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols

    def with_cells(self, cells: Sequence[Tuple[int, int]], alive: bool = True) -> 'Grid':
        """Return a copy with the given (row, col) cells set.

        Raises:
            IndexError: If a coordinate is out of bounds
        """
        state = self.to_array()
        for row, col in cells:
            self._check_bounds(row, col)
            state[row, col] = alive
        return Grid(self.rows, self.cols, state)

    def count_alive(self) -> int:
        """Count total number of alive cells."""
        return int(np.sum(self._state))

    def density(self) -> float:
        """Get fraction of cells that are alive."""
        if self.size == 0:
            return 0.0
        return self.count_alive() / self.size

    def is_empty(self) -> bool:
        """Check if all cells are dead."""
        return not np.any(self._state)

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of alive cells (min_row, min_col, max_row, max_col).

        Returns:
            Bounding box, or None when no cell is alive
        """
        if self.is_empty():
            return None

        alive_rows, alive_cols = np.where(self._state)
        return (int(alive_rows.min()), int(alive_cols.min()),
                int(alive_rows.max()), int(alive_cols.max()))

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self.rows}x{self.cols} grid")

    def __getitem__(self, key: Tuple[int, int]) -> bool:
        """Access cell state using grid[row, col] syntax."""
        row, col = key
        self._check_bounds(row, col)
        return bool(self._state[row, col])

    def __eq__(self, other: object) -> bool:
        """Exact dimension-and-cell-wise equality."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._state, other._state)

    def __hash__(self) -> int:
        return hash((self.shape, self._state.tobytes()))

    def __str__(self) -> str:
        """String representation showing live cells as X."""
        return '\n'.join(''.join('X' if cell else '.' for cell in row) for row in self._state)

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"Grid({self.rows}x{self.cols}, alive={self.count_alive()})"


def grids_equal(first: Optional[Grid], second: Optional[Grid]) -> bool:
    """Compare two grids cell-wise; differing dimensions are never equal."""
    if first is None or second is None:
        return False
    if first.shape != second.shape:
        return False
    return bool(np.array_equal(first.state, second.state))
