import time
from typing import Callable, Optional, Tuple

from loguru import logger

from loa.config import CONFIG
from loa.core.board import Board
from loa.core.errors import GameOverError, NoLegalMoveError
from loa.core.evaluator import Evaluator, RandInt
from loa.core.move import Move
from loa.core.utils import print_info

# Larger than any evaluation, including a win.
INF = 2**31 - 1

WHITE_SENSE = 1
BLACK_SENSE = -1

class SearchEngine:
    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        depth: Optional[int] = None,
        rand_int: Optional[RandInt] = None,
        reporter: Optional[Callable[[Move], None]] = None,
    ):
        """
        evaluator.evaluate(board, sense) must return an int, positive if White
        is better and negative if Black is better.
        depth = search depth in plies; rand_int feeds the default evaluator's
        noise; reporter is called once with every move returned by get_move().
        """
        self.evaluator = evaluator or Evaluator(rand_int=rand_int)
        self.max_depth = CONFIG.search.depth if depth is None else depth
        if self.max_depth < 1:
            raise ValueError(f"Search depth must be positive, got {self.max_depth}")
        self.reporter = reporter
        self.nodes = 0
        self._found_move: Optional[Move] = None

    # Public API
    def get_move(self, board: Board) -> Move:
        """Search BOARD, report the chosen move and return it."""
        if board.game_over():
            raise GameOverError(f"Game is over: {board.winner()}")
        move, _value = self.search_best_move(board)
        if move is None:
            raise NoLegalMoveError(f"{board.turn} has no legal move")
        if self.reporter:
            self.reporter(move)
        return move

    def search_best_move(self, board: Board) -> Tuple[Optional[Move], int]:
        """
        Returns (best_move, value). best_move is None when the game is over
        or the side to move has no legal move. BOARD is not modified.
        """
        self.nodes = 0
        self._found_move = None
        sense = board.turn.sense
        self.evaluator.reset()
        # The root position is the baseline for the momentum bonus.
        root_value = self.evaluator.evaluate(board, sense)
        if board.game_over():
            return None, root_value

        search_board = board.copy()
        start_time = time.time()
        value = self._alpha_beta(search_board, self.max_depth, sense, sense, -INF, INF, True)
        elapsed = time.time() - start_time
        print_info(self.max_depth, value, self.nodes, elapsed, self._found_move,
                   self.evaluator.cfg.winning_value)
        return self._found_move, value

    # -------------------------
    # Core minimax (alpha-beta)
    # -------------------------
    def _alpha_beta(self, board: Board, depth: int, sense: int, root_sense: int,
                    alpha: int, beta: int, save_move: bool) -> int:
        """
        sense: +1 if this layer maximizes (White to move), -1 if it minimizes.
        root_sense orients the evaluator's momentum bonus toward the side the
        search is for. Records the chosen move in _found_move iff save_move.
        """
        self.nodes += 1
        if depth == 0 or board.game_over():
            return self.evaluator.evaluate(board, root_sense)

        moves = board.legal_moves()
        if not moves:
            logger.debug(f"No legal moves for {board.turn} at depth {depth}")
            return self.evaluator.evaluate(board, root_sense)

        best = -INF if sense == WHITE_SENSE else INF
        for move in moves:
            with board.trial(move):
                value = self._alpha_beta(board, depth - 1, -sense, root_sense,
                                         alpha, beta, False)
            move.score = value
            # Strict improvement: ties keep the earlier move.
            if sense * value > sense * best:
                best = value
                if save_move:
                    self._found_move = move
            if sense == WHITE_SENSE:
                alpha = max(alpha, best)
            else:
                beta = min(beta, best)
            if beta <= alpha:
                break
        return best
