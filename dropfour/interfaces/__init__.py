"""
dropfour.interfaces - Ways of driving the engine from outside

Currently a command-line interface; the Gymnasium environment lives in
dropfour.game.rules.
"""

# Don't import anything here to avoid circular imports
__all__ = []
