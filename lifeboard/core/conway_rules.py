"""
Pure Conway's Game of Life Rules

Rule constants and neighbor counting for the classic B3/S23 rule on a
bounded grid. Cells outside the grid are treated as dead; there is no
wraparound at the edges.
"""

from typing import Set

import numpy as np


# Standard Conway rules
SURVIVAL_SET: Set[int] = {2, 3}  # Live cells survive with 2-3 neighbors
BIRTH_SET: Set[int] = {3}        # Dead cells born with exactly 3 neighbors

# Moore neighborhood offsets (row, col), center excluded
NEIGHBOR_OFFSETS = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if not (dr == 0 and dc == 0)
)


def update_cell(alive: bool, live_neighbors: int) -> bool:
    """Apply Conway's rules to determine next cell state.

    Args:
        alive: Current cell state (True=alive, False=dead)
        live_neighbors: Number of live neighbors (0-8)

    Returns:
        Next cell state (True=alive, False=dead)
    """
    if alive:
        return live_neighbors in SURVIVAL_SET
    else:
        return live_neighbors in BIRTH_SET


def count_cell_neighbors(state: np.ndarray, row: int, col: int) -> int:
    """Count live neighbors of the cell at (row, col) using Moore neighborhood.

    Args:
        state: 2D boolean numpy array
        row: Cell row
        col: Cell column

    Returns:
        Number of live neighbors (0-8)
    """
    rows, cols = state.shape
    count = 0

    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc
        # Cells outside the grid are dead
        if 0 <= nr < rows and 0 <= nc < cols and state[nr, nc]:
            count += 1

    return count


def count_live_neighbors(state: np.ndarray) -> np.ndarray:
    """Count live neighbors for every cell at once.

    The array is padded with a one-cell dead border and the eight shifted
    windows are summed, so edge cells see only in-bounds neighbors.

    Args:
        state: 2D boolean numpy array of shape (rows, cols)

    Returns:
        Integer array of the same shape holding neighbor counts (0-8)
    """
    rows, cols = state.shape
    padded = np.pad(state.astype(np.uint8), 1, mode='constant', constant_values=0)
    counts = np.zeros((rows, cols), dtype=np.uint8)

    for dr, dc in NEIGHBOR_OFFSETS:
        counts += padded[1 + dr:1 + dr + rows, 1 + dc:1 + dc + cols]

    return counts


def apply_rules(state: np.ndarray, neighbor_counts: np.ndarray) -> np.ndarray:
    """Vectorized rule application over a whole array.

    Args:
        state: Current 2D boolean array
        neighbor_counts: Neighbor counts of the same shape

    Returns:
        New boolean array with the next generation
    """
    survives = state & np.isin(neighbor_counts, list(SURVIVAL_SET))
    born = ~state & np.isin(neighbor_counts, list(BIRTH_SET))
    return survives | born
