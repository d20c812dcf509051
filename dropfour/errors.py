"""
errors.py - Exceptions raised by the dropfour engine

Every error is a local, recoverable condition. Lookup misses and rejected
moves are reported to the caller, which decides whether to re-prompt.
"""

from typing import Optional


class DropFourError(Exception):
    """Base class for all engine errors."""


class NotOccupiedError(DropFourError, LookupError):
    """Raised when looking up a cell that holds no piece."""

    def __init__(self, position):
        self.position = position
        super().__init__(f"No piece at {position}")


class MoveError(DropFourError):
    """Base class for placements the engine refuses."""


class OutOfRangeError(MoveError, IndexError):
    """Raised for a column or coordinate outside the grid."""

    def __init__(self, message: str, column: Optional[int] = None, position=None):
        self.column = column
        self.position = position
        super().__init__(message)


class ColumnFullError(MoveError, ValueError):
    """Raised when dropping a piece into a column with no empty row."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class GameOverError(MoveError):
    """Raised when a move is attempted after the game has finished."""
