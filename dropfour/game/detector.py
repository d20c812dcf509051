"""
detector.py - Straight-line match detection

The detector sweeps the grid once per axis. For each fixed row (horizontal
pass) or column (vertical pass) it walks the cells in order, grows a run of
same-typed pieces, and emits a match whenever a run of at least ``threshold``
pieces is closed. Runs close when a different piece type appears, at the end
of the sweep, and, under ``GapPolicy.BREAK``, at an empty cell.

Results are recomputed from scratch on every call; nothing is cached between
calls.
"""

from typing import List, Optional

from dropfour.debug import debug
from dropfour.errors import NotOccupiedError
from dropfour.game.matches import Match, Matches
from dropfour.utils import MATCH_THRESHOLD, GapPolicy, MatchDirection, Position


class MatchDetector:
    """
    Finds straight runs of same-typed pieces on a ``Grid``.

    The detector only reads the grid, so one instance can be shared between
    sessions.
    """

    def __init__(self, threshold: int = MATCH_THRESHOLD, gap_policy: GapPolicy = GapPolicy.SKIP):
        if threshold < 1:
            raise ValueError(f"Match threshold must be at least 1, got {threshold}")
        self.threshold = threshold
        self.gap_policy = GapPolicy(gap_policy)

    def __repr__(self):
        return f"MatchDetector(threshold={self.threshold}, gap_policy={self.gap_policy})"

    def find_matches(self, grid) -> Matches:
        """
        Scan both axes and merge the results.

        Args:
            grid: The grid to scan

        Returns:
            Horizontal matches (bottom row first) followed by vertical matches
            (leftmost column first). A cell may belong to two matches.
        """
        matches = self.straight_matches(grid, MatchDirection.HORIZONTAL)
        matches.append(self.straight_matches(grid, MatchDirection.VERTICAL))
        if not matches.is_empty():
            debug.debug(f"Found {len(matches)} match(es) covering "
                        f"{len(matches.without_duplicates())} cells", "detector")
        return matches

    def straight_matches(self, grid, direction: MatchDirection) -> Matches:
        """Collect the matches along one axis."""
        if direction == MatchDirection.HORIZONTAL:
            outer_size, inner_size = grid.height, grid.width
        else:
            outer_size, inner_size = grid.width, grid.height

        matches = Matches()
        for outer in range(outer_size):
            run: List[Position] = []
            previous_type = None
            for inner in range(inner_size):
                if direction == MatchDirection.HORIZONTAL:
                    pos = Position(inner, outer)
                else:
                    pos = Position(outer, inner)

                try:
                    current_type = grid.get(pos)
                except NotOccupiedError:
                    if self.gap_policy == GapPolicy.BREAK:
                        self._close_run(run, direction, matches)
                        run, previous_type = [], None
                    continue

                if not run or current_type == previous_type:
                    run.append(pos)
                else:
                    self._close_run(run, direction, matches)
                    run = [pos]
                previous_type = current_type

            self._close_run(run, direction, matches)
        return matches

    def _close_run(self, run: List[Position], direction: MatchDirection,
                   matches: Matches) -> Optional[Match]:
        if len(run) < self.threshold:
            return None
        match = Match.straight(run, direction)
        debug.trace(f"{direction.name.lower()} run of {len(run)} closed at {run[-1]}", "detector")
        matches.add(match)
        return match
