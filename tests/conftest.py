import os
import sys

import pytest

# Ensure repo-root modules (e.g., `import board`) resolve without installing.
root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)

from game import GameState  # noqa: E402


@pytest.fixture
def started() -> GameState:
    state = GameState()
    state.start()
    return state


def play_first_moves(state: GameState, count: int) -> GameState:
    """Advance a game by always taking the first generated move."""
    for _ in range(count):
        if state.game_over:
            break
        state = state.apply_move(state.get_valid_moves()[0])
    return state


@pytest.fixture
def advance():
    return play_first_moves
