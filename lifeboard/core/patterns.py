"""Classic Conway reference patterns.

Small canonical patterns used for seeding boards, API examples and
behavioural checks of the engine. Patterns are placed without wrapping;
a pattern that does not fit on the board is rejected.
"""

import numpy as np
from typing import Dict

from .grid import Grid


# Still lifes
BLOCK = np.array([
    [True, True],
    [True, True]
], dtype=bool)

BEEHIVE = np.array([
    [False, True, True, False],
    [True, False, False, True],
    [False, True, True, False]
], dtype=bool)

# Period-2 oscillator (horizontal phase)
BLINKER = np.array([[True, True, True]], dtype=bool)

# Moves one cell down and one cell right every 4 generations
GLIDER = np.array([
    [False, True, False],
    [False, False, True],
    [True, True, True]
], dtype=bool)

PATTERNS: Dict[str, np.ndarray] = {
    'block': BLOCK,
    'beehive': BEEHIVE,
    'blinker': BLINKER,
    'glider': GLIDER,
}


def place_pattern(pattern: np.ndarray, rows: int, cols: int, row: int = 0, col: int = 0) -> Grid:
    """Create a dead grid with pattern stamped at (row, col).

    Args:
        pattern: 2D boolean array
        rows: Board rows
        cols: Board columns
        row: Top row of the pattern
        col: Left column of the pattern

    Returns:
        Grid: New grid containing the pattern

    Raises:
        ValueError: If the pattern does not fit inside the board
    """
    pattern_rows, pattern_cols = pattern.shape
    if row < 0 or col < 0 or row + pattern_rows > rows or col + pattern_cols > cols:
        raise ValueError(
            f"Pattern {pattern_rows}x{pattern_cols} at ({row}, {col}) doesn't fit in {rows}x{cols} board"
        )

    state = np.zeros((rows, cols), dtype=bool)
    state[row:row + pattern_rows, col:col + pattern_cols] = pattern.astype(bool)
    return Grid(rows, cols, state)
