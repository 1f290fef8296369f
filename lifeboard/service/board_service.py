"""Board service: coordinates the store and the simulation driver.

Each operation reads the current grid from the store, advances it with
the simulation driver and writes the result back. Errors from the
engine, driver and store propagate unchanged so the transport layer can
map them to status codes.
"""

import logging
from typing import Any, Optional

from ..core.grid import Grid
from ..core.simulation import SimulationDriver, is_integer
from ..errors import InputError, NotConvergedError, NotFoundError, RangeError, ValidationError
from ..storage.board_store import BoardStore

logger = logging.getLogger(__name__)


class BoardService:
    """Upload boards and advance them through generations.

    Concurrent calls on the same board id may both read the same starting
    grid; the later put wins. No per-board locking is performed.
    """

    def __init__(self, store: BoardStore,
                 driver: Optional[SimulationDriver] = None,
                 min_rows: int = 3,
                 min_cols: int = 3,
                 logger: Optional[logging.Logger] = None):
        """Initialize service.

        Args:
            store: Board store owning the id -> grid mapping
            driver: Simulation driver (default engine if None)
            min_rows: Minimum rows accepted at upload
            min_cols: Minimum columns accepted at upload
            logger: Logging collaborator with a log(level, message) method
        """
        self.store = store
        self.driver = driver or SimulationDriver()
        self.min_rows = min_rows
        self.min_cols = min_cols
        self.logger = logger or logging.getLogger(__name__)

    def upload(self, initial: Any) -> str:
        """Store a new board and return its id.

        Args:
            initial: Grid or row-major nested booleans

        Raises:
            InputError: If initial is None
            ShapeError: If initial is not rectangular
            ValidationError: If the board is smaller than the configured minimum
        """
        if initial is None:
            self.logger.log(logging.ERROR, "upload: board is null")
            raise InputError("Board state must be provided")

        grid = Grid.from_rows(initial)
        if grid.rows < self.min_rows or grid.cols < self.min_cols:
            self.logger.log(logging.WARNING, f"upload: board {grid.rows}x{grid.cols} is below the minimum")
            raise ValidationError(
                f"Board must be at least {self.min_rows}x{self.min_cols}, got {grid.rows}x{grid.cols}"
            )

        board_id = self.store.create(grid)
        self.logger.log(logging.INFO, f"upload: board uploaded with id {board_id}")
        return board_id

    def get(self, board_id: str) -> Grid:
        """Current state of a board without advancing it."""
        return self._fetch(board_id, 'get')

    def next(self, board_id: str) -> Grid:
        """Advance a board one generation and return the new state."""
        grid = self.driver.advance_one(self._fetch(board_id, 'next'))
        self.store.put(board_id, grid)
        self.logger.log(logging.INFO, f"next: next state computed for board {board_id}")
        return grid

    def after_steps(self, board_id: str, steps: int) -> Grid:
        """Advance a board by steps generations and return the new state.

        Raises:
            RangeError: If steps is negative
            NotFoundError: If board_id is unknown
        """
        if not is_integer(steps) or steps < 0:
            self.logger.log(logging.WARNING, f"after_steps: invalid steps {steps!r} for board {board_id}")
            raise RangeError('steps', steps, "Steps must be a non-negative integer")

        grid = self.driver.advance_by(self._fetch(board_id, 'after_steps'), steps)
        self.store.put(board_id, grid)
        self.logger.log(logging.INFO, f"after_steps: state after {steps} steps computed for board {board_id}")
        return grid

    def final(self, board_id: str, max_iterations: int) -> Grid:
        """Advance a board to its fixed point and return it.

        The stored state is left untouched when no fixed point is found.

        Raises:
            RangeError: If max_iterations is not positive
            NotFoundError: If board_id is unknown
            NotConvergedError: If no fixed point occurs within max_iterations
        """
        if not is_integer(max_iterations) or max_iterations <= 0:
            self.logger.log(logging.WARNING,
                            f"final: invalid max_iterations {max_iterations!r} for board {board_id}")
            raise RangeError('max_iterations', max_iterations, "Max iterations must be a positive integer")

        start = self._fetch(board_id, 'final')
        try:
            result = self.driver.find_fixed_point(start, max_iterations)
        except NotConvergedError as e:
            self.logger.log(logging.ERROR,
                            f"final: stable state not reached within {max_iterations} iterations for board {board_id}")
            raise NotConvergedError(max_iterations, board_id=board_id) from e

        self.store.put(board_id, result.grid)
        self.logger.log(logging.INFO,
                        f"final: stable state reached for board {board_id} after {result.iterations} iterations")
        return result.grid

    def _fetch(self, board_id: str, operation: str) -> Grid:
        try:
            return self.store.get(board_id)
        except NotFoundError:
            self.logger.log(logging.WARNING, f"{operation}: board with id {board_id} not found")
            raise
