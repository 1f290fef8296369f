"""Error taxonomy for the Lifeboard simulation service.

Every failure raised by the engine, store and service derives from
LifeboardError. Each class also inherits the closest builtin so callers
that only know about ValueError/KeyError keep working.
"""

from typing import Any, Optional


class LifeboardError(Exception):
    """Base class for all Lifeboard failures."""


class InputError(LifeboardError, ValueError):
    """Grid argument is missing (None)."""


class ShapeError(LifeboardError, ValueError):
    """Grid is not a rectangular matrix of booleans."""


class ValidationError(LifeboardError, ValueError):
    """Board rejected at upload (e.g. smaller than the minimum size)."""


class RangeError(LifeboardError, ValueError):
    """Numeric argument outside its allowed range.

    Attributes:
        parameter: Name of the offending parameter
        value: Value that was rejected
    """

    def __init__(self, parameter: str, value: Any, message: str):
        super().__init__(f"{message} ({parameter}={value!r})")
        self.parameter = parameter
        self.value = value


class NotFoundError(LifeboardError, KeyError):
    """Board id is unknown to the store."""

    def __init__(self, board_id: str):
        super().__init__(board_id)
        self.board_id = board_id

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the key
        return f"Board with id {self.board_id} not found"


class NotConvergedError(LifeboardError, RuntimeError):
    """No fixed point reached within the iteration budget."""

    def __init__(self, max_iterations: int, board_id: Optional[str] = None):
        target = f" for board {board_id}" if board_id is not None else ""
        super().__init__(
            f"Stable state not reached{target} within {max_iterations} iterations"
        )
        self.max_iterations = max_iterations
        self.board_id = board_id


class StorageError(LifeboardError, OSError):
    """Board snapshot could not be read or written."""
