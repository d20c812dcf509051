"""
utils.py - Constants, enumerations and helpers shared by the dropfour engine

Coordinates are (x, y) pairs: x is the column counted from the left, y the row
counted from the bottom. Gravity pulls pieces towards y = 0.
"""

from enum import Enum, IntEnum, auto
from typing import Dict, List, NamedTuple, Optional, Tuple

# Game constants
WIDTH = 7
HEIGHT = 6
MATCH_THRESHOLD = 4  # same-typed pieces in a straight line needed for a match
EMPTY_CELL = -1      # array value used for an empty cell in exported boards

EMPTY_SYMBOL = "."


class Position(NamedTuple):
    """A cell coordinate on the grid."""
    x: int
    y: int

    def __str__(self):
        return f"({self.x}, {self.y})"


class PieceType(IntEnum):
    """The two piece colours. Values double as the tags stored in the grid."""
    RED = 0   # first player
    BLUE = 1  # second player

    def other(self) -> 'PieceType':
        """Get the opposing piece type."""
        return PieceType.BLUE if self == PieceType.RED else PieceType.RED

    @property
    def symbol(self) -> str:
        return "X" if self == PieceType.RED else "O"

    def __str__(self):
        return self.name.capitalize()

    def __format__(self, format_spec):
        return format(str(self), format_spec)


class MatchDirection(Enum):
    """Axis swept by a straight-match scan."""
    HORIZONTAL = auto()  # fixed row, sweep across columns
    VERTICAL = auto()    # fixed column, sweep up the rows


class GapPolicy(Enum):
    """How an empty cell met mid-sweep affects the run being tracked."""
    SKIP = "skip"    # empty cells are invisible; the run carries on past them
    BREAK = "break"  # empty cells close the current run

    def __str__(self):
        return self.value


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    BLUE_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[PieceType]:
        return {GameResult.RED_WIN: PieceType.RED,
                GameResult.BLUE_WIN: PieceType.BLUE}.get(self)

    @classmethod
    def win_for(cls, piece_type: PieceType) -> 'GameResult':
        return cls.RED_WIN if piece_type == PieceType.RED else cls.BLUE_WIN


def cell_symbol(value) -> str:
    """Map a stored piece tag to the character used in ASCII boards."""
    if value is None:
        return EMPTY_SYMBOL
    try:
        return PieceType(value).symbol
    except ValueError:
        return str(value)


def render_grid_ascii(cells: Dict[Position, int], width: int, height: int,
                      highlight: Optional[set] = None) -> str:
    """
    Render grid contents as ASCII art, top row first.

    Args:
        cells: Mapping of occupied positions to piece tags
        width: Number of columns
        height: Number of rows
        highlight: Positions drawn as '*' instead of their symbol

    Returns:
        Multi-line string with column numbers underneath
    """
    highlight = highlight or set()
    border = "+" + "-" * (width * 2 - 1) + "+"
    lines = [border]
    for y in range(height - 1, -1, -1):
        row = []
        for x in range(width):
            pos = Position(x, y)
            if pos in highlight:
                row.append("*")
            else:
                row.append(cell_symbol(cells.get(pos)))
        lines.append("|" + " ".join(row) + "|")
    lines.append(border)
    lines.append(" " + " ".join(str(x % 10) for x in range(width)) + " ")
    return "\n".join(lines)


def parse_rows(text: str) -> List[str]:
    """
    Split a position string into rows.

    Rows are separated by '/' and written top row first, e.g.
    ``"......./0000111"`` is a two-row grid whose bottom row holds four 0
    pieces followed by three 1 pieces.
    """
    rows = [row.strip() for row in text.strip().split("/")]
    if not rows or any(not row for row in rows):
        raise ValueError(f"Empty row in position string: {text!r}")
    width = len(rows[0])
    for row in rows:
        if len(row) != width:
            raise ValueError(f"Rows must all have {width} cells, got {row!r}")
        for char in row:
            if char != EMPTY_SYMBOL and not char.isdigit():
                raise ValueError(f"Unknown cell {char!r} in row {row!r}")
    return rows


def rows_to_cells(rows: List[str]) -> Tuple[int, int, Dict[Position, int]]:
    """
    Convert rows (top row first) into (width, height, cells).

    Returns:
        Tuple of width, height and a mapping of occupied positions to tags
    """
    height = len(rows)
    width = len(rows[0]) if rows else 0
    cells = {}
    for row_index, row in enumerate(rows):
        y = height - 1 - row_index
        for x, char in enumerate(row):
            if char != EMPTY_SYMBOL:
                cells[Position(x, y)] = int(char)
    return width, height, cells
