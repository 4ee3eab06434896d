# constants.py
"""Shared constants/helpers for the Reversi engine.

- EMPTY, BLACK, WHITE
- BOARD_SIZE, DIRECTIONS, INVALID_SQUARE
- EDGE_MASK
- POSITION_WEIGHTS (8x8 numpy table)
- opponent(color)
"""
from __future__ import annotations
from typing import Tuple

import numpy as np

# ---------------------- Colors ----------------------
EMPTY, BLACK, WHITE = 0, 1, 2  # keep numeric and contiguous

BOARD_SIZE = 8

Square = Tuple[int, int]  # (x, y), (0, 0) is top-left

# Returned when the side to move has nothing to play
INVALID_SQUARE: Square = (-1, -1)

# (dx, dy)
DIRECTIONS: Tuple[Square, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

# ---------------------- Positional weights ----------------------
# Indexed [y][x]. Corners are unflippable; X/C squares hand corners away.
POSITION_WEIGHTS = np.array([
    [100, -20,  10,   5,   5,  10, -20, 100],
    [-20, -50,  -2,  -2,  -2,  -2, -50, -20],
    [ 10,  -2,  -1,  -1,  -1,  -1,  -2,  10],
    [  5,  -2,  -1,  -1,  -1,  -1,  -2,   5],
    [  5,  -2,  -1,  -1,  -1,  -1,  -2,   5],
    [ 10,  -2,  -1,  -1,  -1,  -1,  -2,  10],
    [-20, -50,  -2,  -2,  -2,  -2, -50, -20],
    [100, -20,  10,   5,   5,  10, -20, 100],
], dtype=np.int32)

# Boolean mask over the 28 edge cells, indexed [y, x]
EDGE_MASK = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)
EDGE_MASK[0, :] = EDGE_MASK[-1, :] = EDGE_MASK[:, 0] = EDGE_MASK[:, -1] = True


def opponent(color: int) -> int:
    """Return the other side. color must be BLACK (1) or WHITE (2): 1^3=2, 2^3=1."""
    return color ^ 3


__all__ = [
    'EMPTY', 'BLACK', 'WHITE', 'BOARD_SIZE', 'Square', 'INVALID_SQUARE', 'DIRECTIONS',
    'POSITION_WEIGHTS', 'EDGE_MASK',
    'opponent',
]
