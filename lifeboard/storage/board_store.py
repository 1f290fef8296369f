"""Board storage with thread-safe access and optional JSON persistence.

BoardStore owns the mapping from board id to current Grid. Every read and
write of the mapping happens under one lock per store, so a reader never
sees a half-written entry and concurrent writers to different ids never
corrupt each other. Writes to the same id are last-write-wins.
"""

import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core.grid import Grid
from ..errors import InputError, NotFoundError, ShapeError, StorageError

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class BoardStore:
    """In-memory id -> Grid mapping guarded by a single lock.

    Grids are immutable, so handing the stored value to callers never
    exposes the store's internal state to mutation.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize an empty store.

        Args:
            logger: Logging collaborator (module logger if None)
        """
        self.logger = logger or logging.getLogger(__name__)
        self._boards: Dict[str, Grid] = {}
        self._lock = threading.Lock()

    def _new_id(self) -> str:
        return str(uuid.uuid4())

    def create(self, initial: Grid) -> str:
        """Store a new board and return its freshly allocated id.

        Raises:
            InputError: If initial is None
            ShapeError: If initial is a jagged nested sequence
            StorageError: If the write can't be made durable; the board is not kept
        """
        if initial is None:
            raise InputError("Initial grid must be provided")
        grid = Grid.from_rows(initial)

        with self._lock:
            board_id = self._new_id()
            while board_id in self._boards:
                board_id = self._new_id()
            self._boards[board_id] = grid

        try:
            self._after_write()
        except StorageError:
            self._rollback(board_id, grid, None)
            raise

        self.logger.log(logging.INFO, f"Added board with id {board_id} ({grid.rows}x{grid.cols})")
        return board_id

    def get(self, board_id: str) -> Grid:
        """Get the current grid of a board.

        Raises:
            NotFoundError: If board_id is unknown
        """
        with self._lock:
            grid = self._boards.get(board_id)

        if grid is None:
            self.logger.log(logging.WARNING, f"Board with id {board_id} not found")
            raise NotFoundError(board_id)
        return grid

    def put(self, board_id: str, grid: Grid) -> None:
        """Replace the grid of an existing board.

        Unknown ids are rejected; put never inserts.

        Raises:
            NotFoundError: If board_id is unknown
            StorageError: If the write can't be made durable; the previous grid is restored
        """
        if grid is None:
            raise InputError("Grid must be provided")
        grid = Grid.from_rows(grid)

        with self._lock:
            previous = self._boards.get(board_id)
            if previous is not None:
                self._boards[board_id] = grid

        if previous is None:
            self.logger.log(logging.WARNING, f"Cannot update board {board_id}: not found")
            raise NotFoundError(board_id)

        try:
            self._after_write()
        except StorageError:
            self._rollback(board_id, grid, previous)
            raise

        self.logger.log(logging.DEBUG, f"Updated board with id {board_id}")

    def _rollback(self, board_id: str, written: Grid, previous: Optional[Grid]) -> None:
        """Undo a write whose persistence failed.

        Only undone while the entry still holds our grid; a later writer's
        value is left alone.
        """
        with self._lock:
            if self._boards.get(board_id) is not written:
                return
            if previous is None:
                del self._boards[board_id]
            else:
                self._boards[board_id] = previous
        self.logger.log(logging.ERROR, f"Rolled back board {board_id} after failed save")

    def snapshot(self) -> Dict[str, Grid]:
        """Copy of the full mapping taken under the store lock."""
        with self._lock:
            return dict(self._boards)

    def ids(self) -> List[str]:
        """Ids of all stored boards."""
        with self._lock:
            return list(self._boards)

    def persist(self) -> None:
        """Flush the mapping to durable storage (no-op for memory store)."""

    def _after_write(self) -> None:
        """Hook run after every successful create/put."""

    def __contains__(self, board_id: object) -> bool:
        with self._lock:
            return board_id in self._boards

    def __len__(self) -> int:
        with self._lock:
            return len(self._boards)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(boards={len(self)})"


class JsonBoardStore(BoardStore):
    """BoardStore backed by a JSON snapshot file.

    An existing snapshot is loaded on construction. persist() writes the
    whole mapping atomically (temporary file + rename). With autosave
    enabled every create/put is followed by persist().

    Snapshot format:
        {"version": 1, "boards": {"<id>": [[true, false, ...], ...]}}
    """

    def __init__(self, path: Union[str, Path], autosave: bool = False,
                 logger: Optional[logging.Logger] = None):
        """Initialize store and load any existing snapshot.

        Args:
            path: Snapshot file location
            autosave: Persist after every mutation
            logger: Logging collaborator (module logger if None)

        Raises:
            StorageError: If an existing snapshot can't be read or decoded
        """
        super().__init__(logger=logger)
        self.path = Path(path)
        self.autosave = autosave
        # Serializes whole persist() calls; snapshots are taken inside it
        self._persist_lock = threading.Lock()
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            self.logger.log(logging.INFO, f"No snapshot at {self.path}, starting with an empty store")
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read board snapshot {self.path}: {e}") from e

        boards = decode_snapshot(raw, source=str(self.path))
        with self._lock:
            self._boards.update(boards)

        self.logger.log(logging.INFO, f"Loaded {len(boards)} boards from {self.path}")

    def persist(self) -> None:
        """Write the full mapping to the snapshot file.

        Raises:
            StorageError: If the file can't be written
        """
        with self._persist_lock:
            payload = encode_snapshot(self.snapshot())
            directory = self.path.parent
            tmp_name = None
            try:
                directory.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=directory,
                                                 prefix=f".{self.path.name}.", suffix='.tmp',
                                                 delete=False) as tmp:
                    tmp_name = tmp.name
                    json.dump(payload, tmp)
                os.replace(tmp_name, self.path)
            except OSError as e:
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StorageError(f"Could not write board snapshot {self.path}: {e}") from e

        self.logger.log(logging.INFO, f"Saved {len(payload['boards'])} boards to {self.path}")

    def _after_write(self) -> None:
        if self.autosave:
            self.persist()


def encode_snapshot(boards: Dict[str, Grid]) -> dict:
    """Encode an id -> Grid mapping as a JSON-compatible dict."""
    return {
        'version': SNAPSHOT_VERSION,
        'boards': {board_id: grid.to_rows() for board_id, grid in boards.items()},
    }


def decode_snapshot(raw: object, source: str = '<snapshot>') -> Dict[str, Grid]:
    """Decode a snapshot dict into an id -> Grid mapping.

    Raises:
        StorageError: If the structure or any grid is invalid
    """
    if not isinstance(raw, dict) or not isinstance(raw.get('boards'), dict):
        raise StorageError(f"Snapshot {source} has no 'boards' mapping")

    boards = {}
    for board_id, rows in raw['boards'].items():
        try:
            boards[str(board_id)] = Grid.from_rows(rows)
        except (InputError, ShapeError) as e:
            raise StorageError(f"Snapshot {source} has invalid grid for board {board_id}: {e}") from e
    return boards


def create_store(store_path: Optional[Union[str, Path]] = None, autosave: bool = False,
                 logger: Optional[logging.Logger] = None) -> BoardStore:
    """Factory: JSON-backed store when a path is given, memory store otherwise."""
    if store_path:
        return JsonBoardStore(store_path, autosave=autosave, logger=logger)
    return BoardStore(logger=logger)
