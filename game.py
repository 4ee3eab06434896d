import time
from typing import Dict, List, Tuple

from board import Board
from constants import BLACK, WHITE, Square, opponent


class GameState:
    """Board, side to move and terminal flag, plus per-side clocks.

    Lifecycle: GameState() / initialize() gives an empty, finished board;
    start() sets up the opening with Black to move; play_move() advances it.
    move_history only records moves made with play_move().
    While the game is running the side to move always has a legal move,
    otherwise the state is marked game_over.
    """

    def __init__(self):
        self.board = Board()
        self.current_player = BLACK
        self.game_over = True
        self.player_time: Dict[int, float] = {BLACK: 0.0, WHITE: 0.0}
        self.turn_timer = 0.0
        self.move_history: List[Tuple[int, int, int, List[Square]]] = []

    @classmethod
    def from_string(cls, text: str, to_move: int = BLACK) -> 'GameState':
        """Build a running game from a Board.to_string() style diagram."""
        state = cls()
        state.board = Board.from_string(text)
        state.current_player = to_move
        state.game_over = False
        state.turn_timer = time.time()
        return state

    # ---- lifecycle ----
    def initialize(self) -> None:
        self.game_over = True
        self.player_time = {BLACK: 0.0, WHITE: 0.0}
        self.turn_timer = 0.0
        self.move_history = []
        self.board.clear()

    def start(self) -> None:
        self.game_over = False
        self.current_player = BLACK
        self.player_time = {BLACK: 0.0, WHITE: 0.0}
        self.turn_timer = time.time()
        self.move_history = []
        self.board.setup_start()

    # ---- queries ----
    def get_current_player(self) -> int:
        return self.current_player

    def get_score(self, color: int) -> int:
        return self.board.count(color)

    def get_timer(self, color: int) -> float:
        """Seconds used by color, including the running turn."""
        turn_time = 0.0
        if not self.game_over and color == self.current_player:
            turn_time = time.time() - self.turn_timer
        return self.player_time[color] + turn_time

    def get_board_piece(self, square: Square) -> int:
        return self.board.get_piece(square)

    def set_board_piece(self, square: Square, piece: int) -> None:
        self.board.set_piece(square, piece)

    def get_valid_moves(self) -> List[Square]:
        return self.board.get_valid_moves(self.current_player)

    # ---- moves ----
    def play_move(self, move: Square) -> bool:
        """Apply a move generated by get_valid_moves() in place and charge the mover's clock."""
        now = time.time()
        self.player_time[self.current_player] += now - self.turn_timer
        self.turn_timer = now
        color = self.current_player
        flipped = self._advance(move)
        self.move_history.append((move[0], move[1], color, flipped))
        return True

    def apply_move(self, move: Square) -> 'GameState':
        """Return the position after move; self is left untouched.

        Simulated moves charge no clock and start an empty move_history.
        """
        new_state = self.copy(with_history=False)
        new_state._advance(move)
        return new_state

    def _advance(self, move: Square) -> List[Square]:
        color = self.current_player
        flipped = self.board.place(move, color)

        self.current_player = opponent(color)
        if not self.get_valid_moves():
            # Opponent passes; if the mover is stuck too the game is over
            self.current_player = color
            if not self.get_valid_moves():
                self.game_over = True
        return flipped

    def pass_turn(self) -> 'GameState':
        """Copy with the side to move swapped (used when the side to move is blocked)."""
        new_state = self.copy(with_history=False)
        new_state.current_player = opponent(self.current_player)
        return new_state

    def copy(self, with_history: bool = True) -> 'GameState':
        new_state = GameState.__new__(GameState)
        new_state.board = self.board.copy()
        new_state.current_player = self.current_player
        new_state.game_over = self.game_over
        new_state.player_time = dict(self.player_time)
        new_state.turn_timer = self.turn_timer
        new_state.move_history = self.move_history.copy() if with_history else []
        return new_state

    def __repr__(self) -> str:
        b, w = self.board.count_stones()
        return (f"GameState(black={b}, white={w}, to_move={self.current_player}, "
                f"game_over={self.game_over})")
