"""
dropfour - Rules engine for a gravity-based four-in-a-line grid game

This package provides the grid representation, straight-line match
detection, turn handling through GameSession/apply_move, and thin input
shells (a Gymnasium environment and a command-line interface).
"""

# Version number
__version__ = '0.1.0'
