"""Exception hierarchy for the Lines of Action core.

All of these signal a caller defect (a precondition was violated), not a
game condition. The core raises them and never catches them.

Usage:
    from loa.core.errors import IllegalMoveError

    if not board.is_legal(move):
        ...  # validate before calling board.make_move(move)
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from loa.core.move import Move

__all__ = [
    "LOAError",
    "IllegalMoveError",
    "EmptyHistoryError",
    "GameOverError",
    "NoLegalMoveError",
]


class LOAError(Exception):
    """Base exception for all engine errors."""


class IllegalMoveError(LOAError):
    """A move was applied that is not legal in the current position."""

    def __init__(self, move: "Move", reason: Optional[str] = None):
        self.move = move
        message = f"Illegal move: {move}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EmptyHistoryError(LOAError):
    """retract() was called on a board with no moves to undo."""


class GameOverError(LOAError):
    """A move was requested from a position where the game has ended."""


class NoLegalMoveError(LOAError):
    """The side to move has no legal move."""
