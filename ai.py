# Reversi move search: depth-limited minimax with alpha-beta pruning,
# one-ply move ordering, phase-based depth and a per-search node budget.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import DEFAULT_CONFIG, load_config
from constants import INVALID_SQUARE, Square
from evaluator import Evaluator
from game import GameState

# ---- logging ----
logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(message)s', datefmt='%H:%M:%S')

# ---- sentinel scores ----
INF_SCORE = 10**9

# Piece-count thresholds for the root depth policy
OPENING_PIECES = 20
ENDGAME_PIECES = 45


@dataclass(slots=True)
class NodeBudget:
    """Node counter shared by every node of one search call."""
    limit: int
    visited: int = 0
    cutoffs: int = 0

    def visit(self) -> None:
        self.visited += 1

    @property
    def exhausted(self) -> bool:
        return self.visited > self.limit


@dataclass(slots=True)
class SearchResult:
    move: Square
    score: Optional[int]  # None when no search was needed
    depth: int
    nodes: int
    cutoffs: int


class SearchEngine:
    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        opening_depth: int = 4,
        midgame_depth: int = 5,
        endgame_depth: int = 8,
        node_limit: int = 50_000,
    ):
        self.evaluator = evaluator or Evaluator()
        self.opening_depth = opening_depth
        self.midgame_depth = midgame_depth
        self.endgame_depth = endgame_depth
        self.node_limit = node_limit
        self.last_result: Optional[SearchResult] = None

    @classmethod
    def from_profile(cls, profile: dict, evaluator: Optional[Evaluator] = None) -> SearchEngine:
        engine = cls(evaluator)
        engine.apply_profile(profile)
        return engine

    def apply_profile(self, profile: dict) -> None:
        self.opening_depth = int(profile.get('opening_depth', self.opening_depth))
        self.midgame_depth = int(profile.get('midgame_depth', self.midgame_depth))
        self.endgame_depth = int(profile.get('endgame_depth', self.endgame_depth))
        self.node_limit = int(profile.get('node_limit', self.node_limit))

    def depth_for(self, state: GameState) -> int:
        """Shallow in the opening, deep once few empties remain."""
        pieces = state.board.get_piece_count()
        if pieces <= OPENING_PIECES:
            return self.opening_depth
        if pieces >= ENDGAME_PIECES:
            return self.endgame_depth
        return self.midgame_depth

    def order_moves(
        self, state: GameState, moves: List[Square], ai_color: int, maximizing: bool
    ) -> List[Tuple[Square, GameState]]:
        """Pair each move with its resulting state, best-looking first for the node's role.

        Scores are the static evaluation of the child from ai_color's side,
        negated at minimizing nodes. Ties keep generation order.
        """
        children = [(move, state.apply_move(move)) for move in moves]
        if len(children) < 2:
            return children
        sign = 1 if maximizing else -1
        scored = []
        for i, (_, child) in enumerate(children):
            scored.append((sign * self.evaluator.evaluate(child, ai_color), i))
        scored.sort(key=lambda t: (-t[0], t[1]))
        return [children[i] for _, i in scored]

    def alpha_beta(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        ai_color: int,
        maximizing: bool,
        budget: NodeBudget,
    ) -> int:
        """Minimax value of state from ai_color's side.

        The role flips on every ply, including a pass and a move after which
        the opponent was blocked and the mover plays again.
        """
        budget.visit()
        if budget.exhausted:
            if budget.visited == budget.limit + 1:
                logging.debug(f"[Search] Node budget of {budget.limit} exhausted; evaluating leaves")
            return self.evaluator.evaluate(state, ai_color)
        if depth <= 0 or state.game_over:
            return self.evaluator.evaluate(state, ai_color)

        moves = state.get_valid_moves()
        if not moves:
            # Pass: the other side plays, costing one ply
            passed = state.pass_turn()
            if not passed.get_valid_moves():
                passed.game_over = True
                return self.evaluator.evaluate(passed, ai_color)
            return self.alpha_beta(passed, depth - 1, alpha, beta, ai_color, not maximizing, budget)

        children = self.order_moves(state, moves, ai_color, maximizing)

        if maximizing:
            value = -INF_SCORE
            for _, child in children:
                value = max(value, self.alpha_beta(child, depth - 1, alpha, beta, ai_color, False, budget))
                alpha = max(alpha, value)
                if beta <= alpha:
                    budget.cutoffs += 1
                    break
            return value

        value = INF_SCORE
        for _, child in children:
            value = min(value, self.alpha_beta(child, depth - 1, alpha, beta, ai_color, True, budget))
            beta = min(beta, value)
            if beta <= alpha:
                budget.cutoffs += 1
                break
        return value

    def search(self, state: GameState, depth: Optional[int] = None) -> SearchResult:
        """Pick the move for the side to move. state is never modified.

        The root move counts as the first ply, so each candidate's reply tree
        is searched to depth - 1.
        """
        budget = NodeBudget(self.node_limit)
        moves = [] if state.game_over else state.get_valid_moves()

        if not moves:
            logging.debug("[Search] No legal move")
            self.last_result = SearchResult(INVALID_SQUARE, None, 0, 0, 0)
            return self.last_result
        if len(moves) == 1:
            logging.debug(f"[Search] Forced move {moves[0]}")
            self.last_result = SearchResult(moves[0], None, 0, 0, 0)
            return self.last_result

        if depth is None:
            depth = self.depth_for(state)
        ai_color = state.current_player

        best_move = moves[0]
        best_score = -INF_SCORE
        alpha = -INF_SCORE
        for move, child in self.order_moves(state, moves, ai_color, True):
            score = self.alpha_beta(child, depth - 1, alpha, INF_SCORE, ai_color, False, budget)
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)

        logging.info(
            f"[Search] depth={depth}, nodes={budget.visited}, cutoffs={budget.cutoffs}, "
            f"score={best_score}, move={best_move}"
        )
        self.last_result = SearchResult(best_move, best_score, depth, budget.visited, budget.cutoffs)
        return self.last_result

    def get_best_move(self, state: GameState) -> Square:
        return self.search(state).move


class ReversiAI:
    """Configured search engine behind a difficulty setting."""

    def __init__(self, difficulty: Optional[str] = None, config_path: str = "config.json") -> None:
        self.config = load_config(config_path)
        self.search_engine = SearchEngine(Evaluator())
        self.difficulty = ''
        self.set_difficulty(difficulty or self.config.get('difficulty', 'medium'))

    def set_difficulty(self, level: str) -> None:
        """Set difficulty profile and adjust depths and node budget accordingly."""
        profiles = self.config.get('difficulties', {})
        if level not in profiles:
            raise ValueError(f"Unknown difficulty {level!r}; expected one of {sorted(profiles)}")
        self.difficulty = level
        self.search_engine.apply_profile(profiles[level])

    def get_move(self, state: GameState) -> Square:
        return self.search_engine.get_best_move(state)


_default_engine = SearchEngine.from_profile(DEFAULT_CONFIG['difficulties'][DEFAULT_CONFIG['difficulty']])


def select_best_move(state: GameState) -> Square:
    """Best move for the side to move, or INVALID_SQUARE when it has none."""
    return _default_engine.get_best_move(state)
