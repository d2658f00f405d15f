"""Move records produced by legal-move enumeration."""

from dataclasses import dataclass, field

from loa.core.square import Square


@dataclass
class Move:
    from_sq: Square
    to_sq: Square
    is_capture: bool = False
    # Written by the search engine; not part of the move's identity.
    score: int = field(default=0, compare=False)

    def __str__(self):
        return f"{self.from_sq.name}-{self.to_sq.name}"

    @classmethod
    def parse(cls, text: str) -> "Move":
        """Parse ``"a1-c3"`` (or ``"a1c3"``). The capture flag is left False."""
        text = text.strip().lower().replace("-", "")
        if len(text) != 4:
            raise ValueError(f"Invalid move: {text!r}")
        return cls(Square.parse(text[:2]), Square.parse(text[2:]))
