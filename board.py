from typing import List

import numpy as np

from constants import EMPTY, BLACK, WHITE, BOARD_SIZE, DIRECTIONS, Square, opponent

_SYMBOLS = {EMPTY: '.', BLACK: 'B', WHITE: 'W'}
_PIECES = {'.': EMPTY, 'B': BLACK, 'W': WHITE}


def is_square_valid(square: Square) -> bool:
    x, y = square
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


class Board:
    """8x8 grid of EMPTY/BLACK/WHITE cells, stored as int8 and indexed [y, x]."""

    def __init__(self, grid=None):
        self.size = BOARD_SIZE
        if grid is None:
            self.grid = np.full((BOARD_SIZE, BOARD_SIZE), EMPTY, dtype=np.int8)
        else:
            self.grid = np.array(grid, dtype=np.int8)

    def clear(self) -> None:
        self.grid.fill(EMPTY)

    def setup_start(self) -> None:
        """Reset to the standard opening: two white and two black discs crossed in the center."""
        self.clear()
        mid = self.size // 2
        self.grid[mid - 1, mid - 1] = WHITE
        self.grid[mid - 1, mid] = BLACK
        self.grid[mid, mid] = WHITE
        self.grid[mid, mid - 1] = BLACK

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get_piece(self, square: Square) -> int:
        x, y = square
        return int(self.grid[y, x])

    def set_piece(self, square: Square, piece: int) -> None:
        x, y = square
        self.grid[y, x] = piece

    # ---- move generation ----
    def get_valid_moves(self, color: int) -> List[Square]:
        """All squares where color captures at least one line, in row-major order."""
        rows = self.grid.tolist()
        opp = opponent(color)
        moves = []
        for y in range(self.size):
            for x in range(self.size):
                if rows[y][x] != EMPTY:
                    continue
                if self._captures(rows, x, y, color, opp):
                    moves.append((x, y))
        return moves

    def _captures(self, rows, x: int, y: int, color: int, opp: int) -> bool:
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            found_opponent = False

            while self.in_bounds(nx, ny) and rows[ny][nx] == opp:
                found_opponent = True
                nx += dx
                ny += dy

            if found_opponent and self.in_bounds(nx, ny) and rows[ny][nx] == color:
                return True
        return False

    # ---- move application ----
    def get_flips(self, square: Square, color: int) -> List[Square]:
        """Opponent discs that placing color at square would flip."""
        x, y = square
        rows = self.grid.tolist()
        opp = opponent(color)
        flipped = []

        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            to_flip = []

            while self.in_bounds(nx, ny) and rows[ny][nx] == opp:
                to_flip.append((nx, ny))
                nx += dx
                ny += dy

            # A run that ends on an empty cell or the edge is not captured
            if to_flip and self.in_bounds(nx, ny) and rows[ny][nx] == color:
                flipped.extend(to_flip)
        return flipped

    def place(self, square: Square, color: int) -> List[Square]:
        """Put color at square, flip every captured line and return the flipped squares."""
        flipped = self.get_flips(square, color)
        self.set_piece(square, color)
        for fx, fy in flipped:
            self.grid[fy, fx] = color
        return flipped

    # ---- counting ----
    def count(self, color: int) -> int:
        return int(np.count_nonzero(self.grid == color))

    def count_stones(self):
        return self.count(BLACK), self.count(WHITE)

    def get_empty_count(self) -> int:
        return self.count(EMPTY)

    def get_piece_count(self) -> int:
        """Total occupied cells; the game phase is derived from this."""
        return self.size * self.size - self.get_empty_count()

    def copy(self) -> 'Board':
        return Board(self.grid)

    def to_string(self) -> str:
        """Render rows top to bottom, '.' empty, 'B' black, 'W' white."""
        return '\n'.join(''.join(_SYMBOLS[int(c)] for c in row) for row in self.grid) + '\n'

    @classmethod
    def from_string(cls, text: str) -> 'Board':
        """Inverse of to_string(). Whitespace inside a row is ignored."""
        rows = [line.replace(' ', '') for line in text.strip().splitlines() if line.strip()]
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"expected {BOARD_SIZE} rows of {BOARD_SIZE} cells")
        try:
            return cls([[_PIECES[c] for c in row] for row in rows])
        except KeyError as e:
            raise ValueError(f"unknown cell symbol {e.args[0]!r}") from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __repr__(self) -> str:
        b, w = self.count_stones()
        return f"Board(black={b}, white={w})"
