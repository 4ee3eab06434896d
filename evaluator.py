import numpy as np

from constants import EDGE_MASK, POSITION_WEIGHTS, opponent

# Piece-count thresholds for the evaluation phases
LATE_MIDGAME_PIECES = 40
ENDGAME_PIECES = 50

MOBILITY_WEIGHT = 3
OPPONENT_BLOCKED_BONUS = 50
MOBILITY_DOMINANCE_BONUS = 20
EDGE_WEIGHT = 5
PARITY_BONUS = 10


def get_phase(piece_count: int) -> str:
    """Evaluation phase for the number of occupied cells."""
    if piece_count >= ENDGAME_PIECES:
        return "endgame"
    if piece_count >= LATE_MIDGAME_PIECES:
        return "late_midgame"
    return "midgame"


class Evaluator:
    """Static position score from one side's point of view.

    Sum of five terms: material (phase scaled), positional weights, mobility
    (before the endgame), edge occupancy and, in the endgame, parity.
    Pure function of the state; evaluate(s, c) == -evaluate(s, opponent(c)).
    """

    def __init__(self, position_weights=POSITION_WEIGHTS):
        self.position_weights = np.asarray(position_weights, dtype=np.int32)

    def evaluate(self, state, perspective: int) -> int:
        board = state.board
        opp = opponent(perspective)
        piece_count = board.get_piece_count()
        phase = get_phase(piece_count)

        score = 0

        # 1. Material, weak early and decisive late
        score += self._evaluate_material(board, perspective, opp, phase)

        # 2. Positional weights
        score += self._evaluate_positions(board, perspective, opp)

        # 3. Mobility
        if phase != "endgame":
            score += self._evaluate_mobility(board, perspective, opp)

        # 4. Edge occupancy
        score += self._evaluate_edges(board, perspective, opp)

        # 5. Parity
        if phase == "endgame":
            score += self._evaluate_parity(board, state.current_player, perspective)

        return int(score)

    def _evaluate_material(self, board, me: int, opp: int, phase: str) -> int:
        diff = board.count(me) - board.count(opp)
        if phase == "endgame":
            return diff * 5
        if phase == "late_midgame":
            return diff * 2
        # Truncate toward zero so the term stays antisymmetric
        return int(diff / 2)

    def _evaluate_positions(self, board, me: int, opp: int) -> int:
        grid = board.grid
        weights = self.position_weights
        return int(weights[grid == me].sum() - weights[grid == opp].sum())

    def _evaluate_mobility(self, board, me: int, opp: int) -> int:
        """Move-count difference plus bonuses for squeezing the other side."""
        my_moves = len(board.get_valid_moves(me))
        op_moves = len(board.get_valid_moves(opp))

        score = (my_moves - op_moves) * MOBILITY_WEIGHT

        if op_moves == 0 and my_moves > 0:
            score += OPPONENT_BLOCKED_BONUS
        elif my_moves == 0 and op_moves > 0:
            score -= OPPONENT_BLOCKED_BONUS

        if my_moves > 2 * op_moves:
            score += MOBILITY_DOMINANCE_BONUS
        elif op_moves > 2 * my_moves:
            score -= MOBILITY_DOMINANCE_BONUS

        return score

    def _evaluate_edges(self, board, me: int, opp: int) -> int:
        edge_cells = board.grid[EDGE_MASK]
        mine = int(np.count_nonzero(edge_cells == me))
        theirs = int(np.count_nonzero(edge_cells == opp))
        return (mine - theirs) * EDGE_WEIGHT

    def _evaluate_parity(self, board, to_move: int, me: int) -> int:
        # With an odd number of empties the side to move gets the last disc
        if board.get_empty_count() % 2 == 0:
            return 0
        return PARITY_BONUS if to_move == me else -PARITY_BONUS


_default_evaluator = Evaluator()


def evaluate(state, perspective: int) -> int:
    return _default_evaluator.evaluate(state, perspective)
