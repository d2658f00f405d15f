from typing import Optional

from loa.config import CONFIG
from loa.core.board import Board
from loa.core.move import Move
from loa.core.piece import DRAW
from loa.core.search import SearchEngine
from loa.core.evaluator import Evaluator, RandInt

class Engine:
    def __init__(self, depth: Optional[int] = None, rand_int: Optional[RandInt] = None):
        self.board = Board(move_limit=CONFIG.board.move_limit)
        self.search = SearchEngine(Evaluator(rand_int=rand_int), depth=depth)

    def get_best_move(self):
        move, value = self.search.search_best_move(self.board)
        return (str(move) if move else None), value

    def make_move(self, move_str: str) -> bool:
        """Apply a move such as 'a1-c3'. Returns True if it was legal."""
        try:
            move = Move.parse(move_str)
        except ValueError:
            return False
        if self.board.game_over() or not self.board.is_legal_move(move):
            return False
        self.board.make_move(move)
        return True

    def undo(self) -> bool:
        if self.board.moves_made() == 0:
            return False
        self.board.retract()
        return True

    def is_game_over(self) -> bool:
        return self.board.game_over()

    def result(self) -> Optional[str]:
        winner = self.board.winner()
        if winner is None:
            return None
        if winner is DRAW:
            return "Tie."
        return f"{winner.full_name} wins."

    def print_board(self):
        print(self.board)
