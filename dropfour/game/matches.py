"""
matches.py - Result types produced by match detection

A ``Match`` is one validated line of same-typed pieces. ``Matches`` collects
every match found by a single detection pass, in discovery order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional, Set

from dropfour.utils import MatchDirection, Position


class MatchKind(Enum):
    """Shape of a match. Only straight lines are produced today."""
    STRAIGHT = "straight"


@dataclass(frozen=True)
class Match:
    """An immutable set of grid coordinates forming one winning line."""
    positions: FrozenSet[Position]
    kind: MatchKind = MatchKind.STRAIGHT
    direction: Optional[MatchDirection] = None

    @classmethod
    def straight(cls, positions: Iterable, direction: Optional[MatchDirection] = None) -> 'Match':
        return cls(frozenset(Position(*pos) for pos in positions), MatchKind.STRAIGHT, direction)

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, position) -> bool:
        return Position(*position) in self.positions

    def __iter__(self) -> Iterator[Position]:
        return iter(sorted(self.positions))


class Matches:
    """Ordered collection of matches from one detection pass."""

    def __init__(self, matches: Optional[Iterable[Match]] = None):
        self._matches: List[Match] = list(matches) if matches else []

    def add(self, match: Match) -> None:
        self._matches.append(match)

    def append(self, other: 'Matches') -> None:
        """Concatenate another collection onto this one, keeping order."""
        self._matches.extend(other._matches)

    def without_duplicates(self) -> Set[Position]:
        """
        Flatten all matches into one coordinate set.

        Returns:
            Every coordinate in this collection, each exactly once
        """
        return {pos for match in self._matches for pos in match.positions}

    def is_empty(self) -> bool:
        return not self._matches

    @property
    def matches(self) -> List[Match]:
        return list(self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(self._matches)

    def __getitem__(self, index: int) -> Match:
        return self._matches[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matches):
            return NotImplemented
        return self._matches == other._matches

    def __repr__(self) -> str:
        return f"Matches({self._matches!r})"
