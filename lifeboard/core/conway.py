"""Conway's Game of Life transition engine.

Computes generation N+1 from generation N on a bounded rectangular grid.
The engine holds no state: the same input always yields the same output,
the argument is never modified, and one engine may be shared between
threads.
"""

from typing import Any, Dict, Tuple

from .grid import Grid
from .conway_rules import apply_rules, count_cell_neighbors, count_live_neighbors, update_cell
from ..errors import InputError


class ConwayEngine:
    """Conway's Game of Life rules engine.

    Implements the classic cellular automaton rules:
    - Live cell survives with 2-3 neighbors
    - Dead cell becomes alive with exactly 3 neighbors
    - All other cells die/become dead
    """

    def _coerce(self, grid: Any) -> Grid:
        if grid is None:
            raise InputError("Grid must be provided")
        # Nested sequences are validated for rectangularity here
        return Grid.from_rows(grid)

    def count_neighbors(self, grid: Grid, row: int, col: int) -> int:
        """Count living neighbors of a cell using Moore neighborhood.

        Args:
            grid: The grid containing the cell
            row: Row of the cell
            col: Column of the cell

        Returns:
            Number of living neighbors (0-8)
        """
        grid = self._coerce(grid)
        return count_cell_neighbors(grid.state, row, col)

    def update_cell(self, grid: Grid, row: int, col: int) -> bool:
        """Apply Conway's rules to determine next state of a single cell.

        Returns:
            Next state of the cell (True=alive, False=dead)
        """
        grid = self._coerce(grid)
        return update_cell(grid[row, col], count_cell_neighbors(grid.state, row, col))

    def next_generation(self, grid: Grid) -> Grid:
        """Apply one generation of Conway's rules to the entire grid.

        Args:
            grid: Current generation (Grid or row-major nested booleans)

        Returns:
            New grid with the next generation; dimensions are preserved

        Raises:
            InputError: If grid is None
            ShapeError: If grid is a jagged or non-boolean nested sequence
        """
        grid = self._coerce(grid)

        if grid.size == 0:
            return grid

        counts = count_live_neighbors(grid.state)
        return Grid(grid.rows, grid.cols, apply_rules(grid.state, counts))

    def get_rule_table(self) -> Dict[Tuple[bool, int], bool]:
        """Get the rule table for every (current_state, neighbor_count) pair.

        Returns:
            Dictionary mapping (current_state, neighbor_count) to next_state
        """
        rules = {}

        for current_state in [False, True]:
            for neighbors in range(9):
                rules[(current_state, neighbors)] = update_cell(current_state, neighbors)

        return rules


# Shared stateless instance
default_engine = ConwayEngine()
