"""Board coordinates and the geometry of lines of action.

Squares are interned: ``sq(c, r)`` always returns the same object, so they
can be compared with ``is`` and used as dict keys cheaply.
"""

from typing import List, Optional, Tuple

BOARD_SIZE = 8

# Compass directions, clockwise from north. The opposite of d is (d + 4) % 8.
N, NE, E, SE, S, SW, W, NW = range(8)
NOWHERE = -1

DIRECTION_DELTAS: Tuple[Tuple[int, int], ...] = (
    (0, 1),    # N
    (1, 1),    # NE
    (1, 0),    # E
    (1, -1),   # SE
    (0, -1),   # S
    (-1, -1),  # SW
    (-1, 0),   # W
    (-1, 1),   # NW
)

COLUMN_NAMES = "abcdefgh"
ROW_NAMES = "12345678"


def opposite_direction(direction: int) -> int:
    return (direction + 4) % 8


class Square:
    __slots__ = ("col", "row", "index", "name")

    def __init__(self, col: int, row: int):
        self.col = col
        self.row = row
        self.index = row * BOARD_SIZE + col
        self.name = COLUMN_NAMES[col] + ROW_NAMES[row]

    def __repr__(self):
        return f"Square({self.name})"

    def __str__(self):
        return self.name

    def __lt__(self, other: "Square") -> bool:
        return self.index < other.index

    def __reduce__(self):
        return (sq, (self.col, self.row))

    @staticmethod
    def exists(col: int, row: int) -> bool:
        return 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE

    @staticmethod
    def parse(name: str) -> "Square":
        """Parse a designator such as ``"c4"``."""
        name = name.strip().lower()
        if len(name) != 2 or name[0] not in COLUMN_NAMES or name[1] not in ROW_NAMES:
            raise ValueError(f"Invalid square: {name!r}")
        return sq(COLUMN_NAMES.index(name[0]), ROW_NAMES.index(name[1]))

    def direction(self, other: "Square") -> int:
        """Direction of the line from here to OTHER, or NOWHERE."""
        dc = other.col - self.col
        dr = other.row - self.row
        if dc == 0 and dr == 0:
            return NOWHERE
        if dc != 0 and dr != 0 and abs(dc) != abs(dr):
            return NOWHERE
        step = ((dc > 0) - (dc < 0), (dr > 0) - (dr < 0))
        return DIRECTION_DELTAS.index(step)

    def distance(self, other: "Square") -> int:
        return max(abs(other.col - self.col), abs(other.row - self.row))

    def is_valid_move(self, other: "Square") -> bool:
        return self.direction(other) != NOWHERE

    def move_dest(self, direction: int, steps: int) -> Optional["Square"]:
        """The square STEPS away in DIRECTION, or None if off the board."""
        if direction == NOWHERE:
            return None
        dc, dr = DIRECTION_DELTAS[direction]
        col = self.col + dc * steps
        row = self.row + dr * steps
        if not Square.exists(col, row):
            return None
        return sq(col, row)

    def adjacent(self) -> List["Square"]:
        return _ADJACENT[self.index]


_SQUARES = [Square(i % BOARD_SIZE, i // BOARD_SIZE) for i in range(BOARD_SIZE * BOARD_SIZE)]

# Ordered by index: a1, b1, ..., h1, a2, ..., h8.
ALL_SQUARES: Tuple[Square, ...] = tuple(_SQUARES)


def sq(col: int, row: int) -> Square:
    """Return the square at column COL and row ROW (both 0-based)."""
    if not Square.exists(col, row):
        raise ValueError(f"Square ({col}, {row}) is off the board")
    return _SQUARES[row * BOARD_SIZE + col]


def _neighbors(s: Square) -> List[Square]:
    dests = (s.move_dest(d, 1) for d in range(8))
    return [d for d in dests if d is not None]


_ADJACENT = [_neighbors(s) for s in _SQUARES]
