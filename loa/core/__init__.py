"""Core engine components: pieces, squares, moves, board, evaluator and search."""

from .piece import DRAW, Piece
from .square import ALL_SQUARES, Square, sq
from .move import Move
from .board import Board
from .evaluator import Evaluator
from .search import SearchEngine
