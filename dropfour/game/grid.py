"""
grid.py - Grid occupancy map for the dropfour engine

This module implements the Grid class which stores the pieces dropped so far,
applies gravity when a piece is added to a column, and exposes the queries the
rendering and match-detection code need.
"""

import numbers
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from dropfour.debug import debug
from dropfour.errors import ColumnFullError, NotOccupiedError, OutOfRangeError
from dropfour.game.detector import MatchDetector
from dropfour.game.matches import Matches
from dropfour.utils import (EMPTY_CELL, HEIGHT, WIDTH, Position,
                            render_grid_ascii, rows_to_cells)


def _is_index(value) -> bool:
    """Integers (numpy ones included) are valid indices; bools and floats are not."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class Grid:
    """
    A fixed-size grid of columns that pieces fall into.

    Only occupied cells are stored; a position missing from ``elements`` is
    empty. Within a column the occupied cells always run from y = 0 upwards
    without gaps as long as pieces arrive through ``add_at_column``.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        """
        Initialize an empty grid.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._elements: Dict[Position, int] = {}
        debug.debug(f"Initializing {self._width}x{self._height} grid", "grid")

    @classmethod
    def from_rows(cls, rows: Iterable[str], height: Optional[int] = None) -> 'Grid':
        """
        Build a grid from rows of text, top row first.

        '.' marks an empty cell and a digit a piece type. Pieces are placed
        exactly where they are drawn, so floating pieces are allowed.

        Args:
            rows: Equal-length strings, the last one being the bottom row
            height: Total height; extra empty rows are added on top

        Returns:
            The populated grid
        """
        rows = list(rows)
        width, row_count, cells = rows_to_cells(rows)
        grid = cls(width, height if height is not None else row_count)
        for pos, piece_type in cells.items():
            grid.insert(pos, piece_type)
        return grid

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def piece_count(self) -> int:
        """Number of occupied cells."""
        return len(self._elements)

    @property
    def elements(self) -> Mapping[Position, int]:
        """Read-only view of the occupied cells."""
        return MappingProxyType(self._elements)

    def in_bounds(self, position) -> bool:
        """
        Check whether a position is an integer cell inside the grid.

        Args:
            position: (x, y) pair

        Returns:
            True if both coordinates are integers within the grid, False otherwise
        """
        x, y = position
        if not (_is_index(x) and _is_index(y)):
            return False
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, position) -> int:
        """
        Look up the piece type stored at a position.

        Raises:
            NotOccupiedError: if no piece is stored there
        """
        pos = Position(*position)
        try:
            return self._elements[pos]
        except KeyError:
            raise NotOccupiedError(pos) from None

    def is_occupied(self, position) -> bool:
        """Check whether a piece is stored at a position."""
        return Position(*position) in self._elements

    def insert(self, position, piece_type: int) -> None:
        """
        Write a piece at a position, replacing whatever was there.

        Gravity is not applied; use ``add_at_column`` for player moves.

        Raises:
            OutOfRangeError: if the position lies outside the grid
        """
        if not self.in_bounds(position):
            raise OutOfRangeError(f"Position {tuple(position)} is outside the "
                                  f"{self._width}x{self._height} grid", position=position)
        pos = Position(int(position[0]), int(position[1]))
        debug.trace(f"Inserting {piece_type} at {pos}", "grid")
        self._elements[pos] = piece_type

    def add_at_column(self, column: int, piece_type: int) -> Position:
        """
        Drop a piece into a column; it lands on the lowest empty row.

        Args:
            column: Column index, 0 is leftmost
            piece_type: Tag of the piece being dropped

        Returns:
            The position the piece landed on

        Raises:
            OutOfRangeError: if the column does not exist
            ColumnFullError: if every row of the column is occupied
        """
        self._check_column(column)
        column = int(column)
        for y in range(self._height):
            pos = Position(column, y)
            if pos not in self._elements:
                self.insert(pos, piece_type)
                debug.debug(f"Piece {piece_type} dropped into column {column}, landed at {pos}", "grid")
                return pos
        debug.debug(f"Column {column} is full", "grid")
        raise ColumnFullError(column)

    def column_height(self, column: int) -> int:
        """Number of pieces stacked in a column."""
        self._check_column(column)
        column = int(column)
        y = 0
        while y < self._height and Position(column, y) in self._elements:
            y += 1
        return y

    def is_column_full(self, column: int) -> bool:
        """Check whether a column has no empty row left."""
        return self.column_height(column) == self._height

    def valid_columns(self) -> List[int]:
        """Columns that can still take a piece."""
        return [x for x in range(self._width) if not self.is_column_full(x)]

    def is_full(self) -> bool:
        """Check whether every cell of the grid is occupied."""
        return len(self._elements) == self._width * self._height

    def get_matches(self, detector=None) -> Matches:
        """
        Find every straight match currently on the grid.

        Args:
            detector: MatchDetector to use; a default one when None
        """
        if detector is None:
            detector = MatchDetector()
        return detector.find_matches(self)

    def copy(self) -> 'Grid':
        """
        Create an independent copy of the grid.

        Returns:
            A new Grid with the same size and pieces
        """
        new_grid = Grid(self._width, self._height)
        new_grid._elements = dict(self._elements)
        return new_grid

    def to_array(self) -> np.ndarray:
        """
        Export the grid as a (height, width) int8 array indexed [y, x].

        Empty cells hold EMPTY_CELL.
        """
        array = np.full((self._height, self._width), EMPTY_CELL, dtype=np.int8)
        for (x, y), piece_type in self._elements.items():
            array[y, x] = int(piece_type)
        return array

    def render(self, highlight=None) -> str:
        """
        Render the grid as ASCII art, top row first.

        Args:
            highlight: Positions to draw as '*', e.g. the cells of a match

        Returns:
            String representation of the grid
        """
        return render_grid_ascii(self._elements, self._width, self._height, highlight)

    def _check_column(self, column) -> None:
        if not _is_index(column) or not 0 <= column < self._width:
            raise OutOfRangeError(f"Column {column} is outside 0..{self._width - 1}", column=column)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width, self._height, self._elements) == \
            (other._width, other._height, other._elements)

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, pieces={len(self._elements)})"

    def __str__(self) -> str:
        return self.render()
