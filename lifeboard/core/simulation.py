"""Simulation drivers built on the Conway transition engine.

Three ways to move a grid forward: one generation, a fixed number of
generations, or until a fixed point (still life) is reached. Only
period-1 fixed points count as stable; an oscillator such as the blinker
never satisfies G(i) == G(i+1) and always exhausts its iteration budget.
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Any, Iterator, Optional
import logging

from .conway import ConwayEngine, default_engine
from .grid import Grid, grids_equal
from ..errors import InputError, NotConvergedError, RangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedPoint:
    """Result of a fixed-point search.

    Attributes:
        grid: The stable generation
        iterations: Number of transitions applied to reach it (>= 1)
    """

    grid: Grid
    iterations: int


def is_integer(value: Any) -> bool:
    """True for int-like values (numpy integers included), never for bool."""
    return isinstance(value, Integral) and not isinstance(value, bool)


class SimulationDriver:
    """Applies the transition engine repeatedly to a grid."""

    def __init__(self, engine: Optional[ConwayEngine] = None):
        """Initialize driver.

        Args:
            engine: Transition engine to use (shared default engine if None)
        """
        self.engine = engine or default_engine

    def generations(self, grid: Grid) -> Iterator[Grid]:
        """Lazily yield G0, G1, G2, ... starting with grid itself.

        The sequence is unbounded; callers decide when to stop.
        """
        current = Grid.from_rows(grid)
        while True:
            yield current
            current = self.engine.next_generation(current)

    def advance_one(self, grid: Grid) -> Grid:
        """Advance exactly one generation."""
        return self.engine.next_generation(grid)

    def advance_by(self, grid: Grid, steps: int) -> Grid:
        """Advance a fixed number of generations.

        Args:
            grid: Starting generation
            steps: Number of transitions to apply (0 returns grid unchanged)

        Returns:
            Generation G(steps)

        Raises:
            RangeError: If steps is negative or not an integer
            InputError: If grid is None
        """
        if not is_integer(steps) or steps < 0:
            raise RangeError('steps', steps, "Steps must be a non-negative integer")
        if grid is None:
            raise InputError("Grid must be provided")

        current = Grid.from_rows(grid)
        for _ in range(steps):
            current = self.engine.next_generation(current)

        logger.debug(f"Advanced {current!r} by {steps} steps")
        return current

    def find_fixed_point(self, grid: Grid, max_iterations: int) -> FixedPoint:
        """Search for a period-1 fixed point.

        After each transition the new generation is compared with the one
        that produced it; the first match is returned.

        Args:
            grid: Starting generation
            max_iterations: Maximum number of transitions to apply (> 0)

        Returns:
            FixedPoint with the stable grid and the transitions it took

        Raises:
            RangeError: If max_iterations is not a positive integer
            InputError: If grid is None
            NotConvergedError: If no fixed point occurs within max_iterations
        """
        if not is_integer(max_iterations) or max_iterations <= 0:
            raise RangeError('max_iterations', max_iterations, "Max iterations must be a positive integer")
        if grid is None:
            raise InputError("Grid must be provided")

        current = Grid.from_rows(grid)
        for iteration in range(1, max_iterations + 1):
            successor = self.engine.next_generation(current)
            if grids_equal(current, successor):
                logger.debug(f"Fixed point reached after {iteration} iterations")
                return FixedPoint(successor, iteration)
            current = successor

        raise NotConvergedError(max_iterations)

    def advance_until_stable(self, grid: Grid, max_iterations: int) -> Grid:
        """Advance until a generation equals its predecessor.

        See find_fixed_point for the exact contract.
        """
        return self.find_fixed_point(grid, max_iterations).grid
