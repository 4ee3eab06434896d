import itertools

import numpy as np
import pytest

from constants import BLACK, WHITE, EMPTY
from game import GameState


def test_new_state_is_empty_and_over() -> None:
    state = GameState()
    assert state.game_over is True
    assert state.board.get_empty_count() == 64
    assert state.get_valid_moves() == []


def test_initialize_clears_a_running_game(started) -> None:
    started.initialize()
    assert started.game_over is True
    assert started.get_score(BLACK) == 0
    assert started.get_score(WHITE) == 0
    assert started.move_history == []


def test_start_sets_opening(started) -> None:
    assert started.game_over is False
    assert started.get_current_player() == BLACK
    assert started.get_score(BLACK) == 2
    assert started.get_score(WHITE) == 2
    assert started.get_board_piece((3, 3)) == WHITE


def test_set_board_piece(started) -> None:
    started.set_board_piece((0, 0), WHITE)
    assert started.get_board_piece((0, 0)) == WHITE
    assert started.get_score(WHITE) == 3


def test_play_move_flips_and_swaps_side(started) -> None:
    assert started.play_move((3, 2)) is True
    assert started.get_current_player() == WHITE
    assert started.get_board_piece((3, 2)) == BLACK
    assert started.get_board_piece((3, 3)) == BLACK
    assert started.get_score(BLACK) == 4
    assert started.get_score(WHITE) == 1
    assert started.move_history == [(3, 2, BLACK, [(3, 3)])]


def test_opponent_without_moves_passes_back() -> None:
    state = GameState.from_string("""
        BW......
        ........
        BW......
        ........
        ........
        ........
        ........
        ........
    """, to_move=BLACK)
    state.play_move((2, 0))
    assert state.get_current_player() == BLACK
    assert state.game_over is False
    assert state.get_valid_moves() == [(2, 2)]


def test_game_ends_when_neither_side_can_move() -> None:
    state = GameState.from_string("""
        BW......
        ........
        ........
        ........
        ........
        ........
        ........
        ........
    """, to_move=BLACK)
    state.play_move((2, 0))
    assert state.game_over is True
    assert state.get_score(WHITE) == 0


def test_apply_move_leaves_original_untouched(started) -> None:
    before = started.board.grid.copy()
    child = started.apply_move((2, 3))
    assert np.array_equal(started.board.grid, before)
    assert started.get_current_player() == BLACK
    assert started.move_history == []
    assert child.get_current_player() == WHITE
    assert child.get_board_piece((2, 3)) == BLACK
    assert child.move_history == []


def test_pass_turn_swaps_side_on_a_copy(started) -> None:
    passed = started.pass_turn()
    assert passed.get_current_player() == WHITE
    assert started.get_current_player() == BLACK
    assert passed.board == started.board


def test_full_game_reaches_terminal_state(started, advance) -> None:
    state = advance(started, 100)
    assert state.game_over is True
    assert state.board.get_valid_moves(BLACK) == []
    assert state.board.get_valid_moves(WHITE) == []
    assert state.get_score(BLACK) + state.get_score(WHITE) + state.board.count(EMPTY) == 64


def test_timers_charge_the_mover(monkeypatch: pytest.MonkeyPatch) -> None:
    clock = itertools.chain([100.0, 103.5], itertools.repeat(105.0))
    monkeypatch.setattr("game.time.time", lambda: next(clock))
    state = GameState()
    state.start()
    state.play_move((3, 2))
    assert state.get_timer(BLACK) == pytest.approx(3.5)
    assert state.get_timer(WHITE) == pytest.approx(1.5)


def test_simulated_moves_do_not_touch_clocks(started) -> None:
    child = started.apply_move((3, 2))
    assert child.player_time == {BLACK: 0.0, WHITE: 0.0}
    assert child.turn_timer == started.turn_timer


def test_play_move_keeps_history_across_turns(started) -> None:
    started.play_move((3, 2))
    started.play_move((2, 2))
    assert [(x, y, c) for x, y, c, _ in started.move_history] == [(3, 2, BLACK), (2, 2, WHITE)]
    assert started.copy().move_history == started.move_history
    assert started.copy(with_history=False).move_history == []


def test_diagram_game_starts_its_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    clock = itertools.chain([500.0, 502.0], itertools.repeat(510.0))
    monkeypatch.setattr("game.time.time", lambda: next(clock))
    state = GameState.from_string("""
        BW......
        ........
        BW......
        ........
        ........
        ........
        ........
        ........
    """, to_move=BLACK)
    state.play_move((2, 0))
    assert state.player_time[BLACK] == pytest.approx(2.0)
    # Black moves again after White's pass
    assert state.get_timer(BLACK) == pytest.approx(10.0)
