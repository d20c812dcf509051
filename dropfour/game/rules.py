"""
rules.py - Turn handling and the Gymnasium environment for dropfour

This module provides:
1. GameSession, the explicit per-game state (grid, player to move, result)
2. apply_move, the single entry point input shells call for a player's move
3. DropFourEnv, a gymnasium-compatible shell around a GameSession
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.errors import GameOverError, MoveError
from dropfour.game.detector import MatchDetector
from dropfour.game.grid import Grid
from dropfour.game.matches import Matches
from dropfour.utils import (EMPTY_CELL, HEIGHT, MATCH_THRESHOLD, WIDTH,
                            GameResult, GapPolicy, PieceType, Position)


@dataclass(frozen=True)
class MoveOutcome:
    """What happened after one successful placement."""
    position: Position
    piece_type: PieceType
    matches: Matches
    result: GameResult

    @property
    def is_winning(self) -> bool:
        return not self.matches.is_empty()

    @property
    def is_game_over(self) -> bool:
        return self.result.is_game_over()


class GameSession:
    """
    State of one game: the grid, whose turn it is and how the game stands.

    Several sessions can live side by side; nothing is shared between them
    except an optional detector, which is read-only.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT,
                 threshold: Optional[int] = None,
                 gap_policy: Optional[GapPolicy] = None,
                 first_player: PieceType = PieceType.RED,
                 detector: Optional[MatchDetector] = None):
        """
        Args:
            width: Number of columns
            height: Number of rows
            threshold: Pieces in a line needed to win (default MATCH_THRESHOLD)
            gap_policy: Whether empty cells interrupt a run (default SKIP)
            first_player: Piece type that moves first
            detector: Ready-made detector; cannot be combined with
                threshold or gap_policy
        """
        if detector is not None:
            if threshold is not None or gap_policy is not None:
                raise ValueError("Pass either a detector or threshold/gap_policy, not both")
        else:
            detector = MatchDetector(
                MATCH_THRESHOLD if threshold is None else threshold,
                GapPolicy.SKIP if gap_policy is None else gap_policy)
        self.width = width
        self.height = height
        self.first_player = PieceType(first_player)
        self.detector = detector
        self.reset()

    def reset(self) -> None:
        """Start a fresh game with an empty grid."""
        debug.debug("Resetting session", "session")
        self.grid = Grid(self.width, self.height)
        self.active_player = self.first_player
        self.result = GameResult.IN_PROGRESS
        self.moves_made: List[int] = []
        self.last_move: Optional[Position] = None
        self.last_matches = Matches()

    @property
    def winner(self) -> Optional[PieceType]:
        return self.result.winner

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.grid.valid_columns()

    def render(self) -> str:
        return self.grid.render(highlight=self.last_matches.without_duplicates())

    def __repr__(self):
        return (f"GameSession({self.width}x{self.height}, to_move={self.active_player}, "
                f"result={self.result.name}, moves={len(self.moves_made)})")


def apply_move(session: GameSession, column: int) -> MoveOutcome:
    """
    Drop the active player's piece into a column and settle the turn.

    After the piece lands, matches are recomputed over the whole grid. Any
    match wins the game for the player who just moved; a full grid without a
    match is a draw; otherwise the other player is to move.

    Args:
        session: The game to play the move in
        column: Column index chosen by the active player

    Returns:
        The outcome of the move

    Raises:
        GameOverError: if the game has already finished
        OutOfRangeError: if the column does not exist
        ColumnFullError: if the column has no room left
    """
    if session.is_game_over():
        raise GameOverError(f"Game is over ({session.result.name})")

    mover = session.active_player
    position = session.grid.add_at_column(column, mover)
    session.moves_made.append(position.x)
    session.last_move = position

    debug.start_timer("match_check")
    matches = session.grid.get_matches(session.detector)
    debug.end_timer("match_check", "session")
    session.last_matches = matches

    if not matches.is_empty():
        session.result = GameResult.win_for(mover)
        debug.info(f"{mover} wins after move at {position}", "session")
    elif session.grid.is_full():
        session.result = GameResult.DRAW
        debug.info("Game ends in a draw", "session")
    else:
        session.active_player = mover.other()
        debug.debug(f"{session.active_player} to move", "session")

    return MoveOutcome(position, mover, matches, session.result)


class DropFourEnv(gym.Env):
    """
    Gymnasium shell around a GameSession.

    Both players act through ``step``; rewards are given from the first
    player's point of view.
    """

    metadata = {'render_modes': ['ansi', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, width: int = WIDTH,
                 height: int = HEIGHT, threshold: int = MATCH_THRESHOLD,
                 gap_policy: GapPolicy = GapPolicy.SKIP):
        debug.debug("Initializing DropFourEnv", "env")
        self.session = GameSession(width, height, threshold, gap_policy)

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=EMPTY_CELL, high=int(max(PieceType)), shape=(height, width), dtype=np.int8
        )
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.session.reset()
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        debug.debug(f"Environment step with action {action}", "env")
        try:
            outcome = apply_move(self.session, action)
        except MoveError as err:
            debug.warning(f"Invalid action {action}: {err}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = outcome.is_game_over
        if outcome.result == GameResult.DRAW:
            reward = self.reward_draw
        elif outcome.result.winner is not None:
            won = outcome.result.winner == self.session.first_player
            reward = self.reward_win if won else self.reward_lose

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ansi":
            return self.session.render()
        if self.render_mode == "human":
            print(self.session.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.session.grid.to_array()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.session.valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': int(self.session.active_player),
            'game_result': self.session.result.name,
            'moves_made': len(self.session.moves_made),
            'winning_cells': sorted(self.session.last_matches.without_duplicates()),
            'last_move': self.session.last_move,
        }
