"""Piece colors for Lines of Action."""

from enum import Enum


class Piece(Enum):
    WHITE = "w"
    BLACK = "b"
    EMPTY = "-"

    def opposite(self) -> "Piece":
        """Return the other color. EMPTY has no opposite and maps to itself."""
        if self is Piece.WHITE:
            return Piece.BLACK
        if self is Piece.BLACK:
            return Piece.WHITE
        return Piece.EMPTY

    @property
    def abbrev(self) -> str:
        return self.value

    @property
    def full_name(self) -> str:
        return self.name.capitalize()

    @property
    def sense(self) -> int:
        """+1 for White (maximizer), -1 for Black (minimizer), 0 for EMPTY."""
        return {Piece.WHITE: 1, Piece.BLACK: -1}.get(self, 0)

    @classmethod
    def from_abbrev(cls, ch: str) -> "Piece":
        try:
            return cls(ch.lower())
        except ValueError:
            raise ValueError(f"Unknown piece character: {ch!r}") from None

    def __str__(self):
        return self.full_name


# A drawn game is reported as EMPTY by Board.winner().
DRAW = Piece.EMPTY
