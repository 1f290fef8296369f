"""Lifeboard: Conway's Game of Life boards with concurrent storage.

Upload a board, then ask for its next generation, the state after N
generations, or its final (stable) state.
"""

from .core.grid import Grid
from .core.conway import ConwayEngine
from .core.simulation import FixedPoint, SimulationDriver
from .storage.board_store import BoardStore, JsonBoardStore
from .service.board_service import BoardService
from .errors import (
    InputError,
    LifeboardError,
    NotConvergedError,
    NotFoundError,
    RangeError,
    ShapeError,
    StorageError,
    ValidationError,
)

__version__ = '1.0.0'
