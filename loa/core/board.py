"""Lines of Action board: rules, move history and connectivity analysis.

The board is the single mutable game position. The search engine mutates one
instance in place with ``make_move`` / ``retract`` (or the ``trial`` context
manager, which guarantees the retract), so every derived value here (region
sizes, winner) is cached and dropped whenever the position changes.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from loa.core.errors import EmptyHistoryError, IllegalMoveError
from loa.core.move import Move
from loa.core.piece import DRAW, Piece
from loa.core.square import (
    ALL_SQUARES,
    BOARD_SIZE,
    Square,
    opposite_direction,
    sq,
)

# Plies before the game is declared a draw.
DEFAULT_MOVE_LIMIT = 60

_W, _B, _E = Piece.WHITE, Piece.BLACK, Piece.EMPTY

# Standard starting position, bottom row (row 1) first: contents[row][col].
INITIAL_PIECES: Tuple[Tuple[Piece, ...], ...] = (
    (_E, _B, _B, _B, _B, _B, _B, _E),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_E, _B, _B, _B, _B, _B, _B, _E),
)


class Board:
    def __init__(
        self,
        contents: Optional[Sequence[Sequence[Piece]]] = None,
        turn: Piece = Piece.BLACK,
        move_limit: int = DEFAULT_MOVE_LIMIT,
    ):
        """Board with CONTENTS (``contents[row][col]``, bottom row first), or
        the standard initial position, and TURN to move. MOVE_LIMIT counts
        plies (moves by either side)."""
        self._grid: List[Piece] = [Piece.EMPTY] * (BOARD_SIZE * BOARD_SIZE)
        self._history: List[Move] = []
        self._turn = turn
        self._move_limit = move_limit
        self._regions: Optional[Dict[Piece, List[int]]] = None
        self._winner_known = False
        self._winner: Optional[Piece] = None
        self.initialize(INITIAL_PIECES if contents is None else contents, turn)

    @classmethod
    def from_layout(cls, text: str, turn: Piece = Piece.BLACK,
                    move_limit: int = DEFAULT_MOVE_LIMIT) -> "Board":
        """Build a board from 8 lines of ``w``/``b``/``-``, row 8 first.

        Whitespace inside a line is ignored, so ``"w - - b - - - -"`` and
        ``"w--b----"`` are the same row.
        """
        rows = ["".join(line.split()) for line in text.strip().splitlines()]
        rows = [row for row in rows if row]
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError("Layout must be 8 rows of 8 squares")
        contents = [[Piece.from_abbrev(ch) for ch in row] for row in reversed(rows)]
        return cls(contents, turn, move_limit)

    def initialize(self, contents: Sequence[Sequence[Piece]], turn: Piece):
        """Set the position to CONTENTS with TURN to move and no history."""
        if turn not in (Piece.WHITE, Piece.BLACK):
            raise ValueError(f"Side to move must be White or Black, not {turn}")
        if len(contents) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in contents):
            raise ValueError("Board contents must be 8x8")
        for r, row in enumerate(contents):
            for c, piece in enumerate(row):
                self._grid[r * BOARD_SIZE + c] = piece
        self._turn = turn
        self._history.clear()
        self._invalidate()

    def clear(self):
        """Reset to the initial position with the default move limit."""
        self._move_limit = DEFAULT_MOVE_LIMIT
        self.initialize(INITIAL_PIECES, Piece.BLACK)

    def copy(self) -> "Board":
        b = Board.__new__(Board)
        b._grid = list(self._grid)
        b._history = list(self._history)
        b._turn = self._turn
        b._move_limit = self._move_limit
        b._invalidate()
        return b

    def copy_from(self, other: "Board"):
        if other is self:
            return
        self._grid = list(other._grid)
        self._history = list(other._history)
        self._turn = other._turn
        self._move_limit = other._move_limit
        self._invalidate()

    def _invalidate(self):
        self._regions = None
        self._winner_known = False
        self._winner = None

    # -------------------------
    # Access
    # -------------------------
    def get(self, square: Square) -> Piece:
        return self._grid[square.index]

    def set(self, square: Square, piece: Piece, next_turn: Optional[Piece] = None):
        """Put PIECE on SQUARE and, if NEXT_TURN is given, make it the side to move."""
        self._grid[square.index] = piece
        if next_turn is not None:
            if next_turn not in (Piece.WHITE, Piece.BLACK):
                raise ValueError(f"Side to move must be White or Black, not {next_turn}")
            self._turn = next_turn
        self._invalidate()

    @property
    def turn(self) -> Piece:
        return self._turn

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def move_limit(self) -> int:
        return self._move_limit

    def set_move_limit(self, limit: int):
        """Declare a draw after LIMIT moves by each side (2 * LIMIT plies)."""
        self._move_limit = limit * 2
        self._invalidate()

    def moves_made(self) -> int:
        return len(self._history)

    def piece_squares(self, color: Piece) -> List[Square]:
        return [s for s in ALL_SQUARES if self._grid[s.index] is color]

    def piece_count(self, color: Piece) -> int:
        return self._grid.count(color)

    # -------------------------
    # Legality
    # -------------------------
    def line_count(self, from_sq: Square, direction: int) -> int:
        """Pieces of either color on the whole line through FROM_SQ along
        DIRECTION, FROM_SQ included once."""
        count = 1
        for d in (direction, opposite_direction(direction)):
            nxt = from_sq.move_dest(d, 1)
            while nxt is not None:
                if self._grid[nxt.index] is not Piece.EMPTY:
                    count += 1
                nxt = nxt.move_dest(d, 1)
        return count

    def is_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """True iff FROM_SQ-TO_SQ is a legal move for the side to move."""
        mover = self._grid[from_sq.index]
        if mover is not self._turn:
            return False
        if not from_sq.is_valid_move(to_sq):
            return False
        direction = from_sq.direction(to_sq)
        distance = from_sq.distance(to_sq)
        if distance != self.line_count(from_sq, direction):
            return False
        if self._grid[to_sq.index] is mover:
            return False
        enemy = mover.opposite()
        for step in range(1, distance):
            if self._grid[from_sq.move_dest(direction, step).index] is enemy:
                return False
        return True

    def is_legal_move(self, move: Move) -> bool:
        """is_legal() for a Move; its capture flag is ignored."""
        return self.is_legal(move.from_sq, move.to_sq)

    def legal_moves(self) -> List[Move]:
        """All legal moves, ordered by source square then destination square."""
        moves = []
        enemy = self._turn.opposite()
        for from_sq in self.piece_squares(self._turn):
            # A line and its reverse hold the same pieces.
            counts = [self.line_count(from_sq, d) for d in range(4)]
            dests = []
            for direction in range(8):
                to_sq = from_sq.move_dest(direction, counts[direction % 4])
                if to_sq is not None and self.is_legal(from_sq, to_sq):
                    dests.append(to_sq)
            for to_sq in sorted(dests):
                moves.append(Move(from_sq, to_sq, self._grid[to_sq.index] is enemy))
        return moves

    # -------------------------
    # Move application
    # -------------------------
    def make_move(self, move: Move):
        """Apply MOVE, which must be legal. The recorded capture flag is
        recomputed from the destination square."""
        if not self.is_legal(move.from_sq, move.to_sq):
            raise IllegalMoveError(move, f"{self._turn} to move")
        from_sq, to_sq = move.from_sq, move.to_sq
        mover = self._grid[from_sq.index]
        captured = self._grid[to_sq.index]
        self._grid[to_sq.index] = mover
        self._grid[from_sq.index] = Piece.EMPTY
        self._history.append(Move(from_sq, to_sq, captured is not Piece.EMPTY))
        self._turn = self._turn.opposite()
        self._invalidate()

    def retract(self):
        """Undo the last move made."""
        if not self._history:
            raise EmptyHistoryError("No moves to retract")
        last = self._history.pop()
        mover = self._grid[last.to_sq.index]
        self._grid[last.from_sq.index] = mover
        self._grid[last.to_sq.index] = mover.opposite() if last.is_capture else Piece.EMPTY
        self._turn = self._turn.opposite()
        self._invalidate()

    @contextmanager
    def trial(self, move: Move) -> Iterator["Board"]:
        """Make MOVE for the duration of a with-block, retracting it on exit."""
        self.make_move(move)
        try:
            yield self
        finally:
            self.retract()

    # -------------------------
    # Connectivity
    # -------------------------
    def _compute_regions(self, color: Piece) -> List[int]:
        visited = set()
        sizes = []
        for start in self.piece_squares(color):
            if start in visited:
                continue
            visited.add(start)
            stack = [start]
            size = 0
            while stack:
                cur = stack.pop()
                size += 1
                for adj in cur.adjacent():
                    if adj not in visited and self._grid[adj.index] is color:
                        visited.add(adj)
                        stack.append(adj)
            sizes.append(size)
        sizes.sort(reverse=True)
        return sizes

    def region_sizes(self, color: Piece) -> List[int]:
        """Sizes of COLOR's connected regions, largest first."""
        if self._regions is None:
            self._regions = {
                Piece.WHITE: self._compute_regions(Piece.WHITE),
                Piece.BLACK: self._compute_regions(Piece.BLACK),
            }
        return list(self._regions[color])

    def pieces_contiguous(self, color: Piece) -> bool:
        return len(self.region_sizes(color)) == 1

    # -------------------------
    # Terminal state
    # -------------------------
    def winner(self) -> Optional[Piece]:
        """The winning side, DRAW (EMPTY) for a tie, or None if the game is
        still in progress. The side that just moved is checked first, so a
        move that connects both sides wins for the mover."""
        if not self._winner_known:
            just_moved = self._turn.opposite()
            if self.pieces_contiguous(just_moved):
                self._winner = just_moved
            elif self.pieces_contiguous(self._turn):
                self._winner = self._turn
            elif self.moves_made() >= self._move_limit:
                self._winner = DRAW
            else:
                self._winner = None
            self._winner_known = True
        return self._winner

    def game_over(self) -> bool:
        return self.winner() is not None

    # -------------------------
    # Comparison and display
    # -------------------------
    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid and self._turn is other._turn

    __hash__ = None

    def layout(self) -> str:
        """Inverse of from_layout()."""
        return "\n".join(
            "".join(self._grid[r * BOARD_SIZE + c].abbrev for c in range(BOARD_SIZE))
            for r in reversed(range(BOARD_SIZE))
        )

    def __str__(self):
        lines = ["==="]
        for r in reversed(range(BOARD_SIZE)):
            row = " ".join(self.get(sq(c, r)).abbrev for c in range(BOARD_SIZE))
            lines.append(f"    {row}")
        lines.append(f"Next move: {self._turn.full_name}")
        lines.append("===")
        return "\n".join(lines)
