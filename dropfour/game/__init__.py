"""
dropfour.game - Core game mechanics

Grid state, match detection and turn handling for dropfour.
"""

from dropfour.game.detector import MatchDetector
from dropfour.game.grid import Grid
from dropfour.game.matches import Match, Matches, MatchKind
from dropfour.game.rules import DropFourEnv, GameSession, MoveOutcome, apply_move

__all__ = ['Grid', 'MatchDetector', 'Match', 'Matches', 'MatchKind',
           'GameSession', 'MoveOutcome', 'apply_move', 'DropFourEnv']
