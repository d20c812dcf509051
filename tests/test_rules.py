import unittest

from dropfour.errors import ColumnFullError, GameOverError, MoveError, OutOfRangeError
from dropfour.game.detector import MatchDetector
from dropfour.game.rules import GameSession, apply_move
from dropfour.utils import GameResult, GapPolicy, PieceType, Position


def play(session, columns):
    outcome = None
    for column in columns:
        outcome = apply_move(session, column)
    return outcome


class TestApplyMove(unittest.TestCase):
    def test_given_new_session_when_moving_then_players_alternate(self):
        session = GameSession()
        self.assertEqual(session.active_player, PieceType.RED)
        outcome = apply_move(session, 3)
        self.assertEqual(outcome.piece_type, PieceType.RED)
        self.assertEqual(outcome.position, Position(3, 0))
        self.assertEqual(outcome.result, GameResult.IN_PROGRESS)
        self.assertFalse(outcome.is_winning)
        self.assertEqual(session.active_player, PieceType.BLUE)
        outcome = apply_move(session, 3)
        self.assertEqual(outcome.position, Position(3, 1))
        self.assertEqual(session.grid.get((3, 1)), PieceType.BLUE)
        self.assertEqual(session.moves_made, [3, 3])
        self.assertEqual(session.last_move, Position(3, 1))

    def test_given_four_red_in_column_when_last_lands_then_red_wins(self):
        session = GameSession()
        outcome = play(session, [0, 1, 0, 1, 0, 1, 0])
        self.assertTrue(outcome.is_winning)
        self.assertEqual(outcome.result, GameResult.RED_WIN)
        self.assertEqual(session.winner, PieceType.RED)
        self.assertEqual(outcome.matches.without_duplicates(), {(0, y) for y in range(4)})
        self.assertEqual(session.active_player, PieceType.RED)
        self.assertEqual(session.valid_moves(), [])

    def test_given_four_blue_in_column_when_last_lands_then_blue_wins(self):
        session = GameSession()
        outcome = play(session, [0, 1, 0, 1, 0, 1, 2, 1])
        self.assertEqual(outcome.result, GameResult.BLUE_WIN)
        self.assertEqual(session.winner, PieceType.BLUE)

    def test_given_finished_game_when_moving_then_game_over_error(self):
        session = GameSession()
        play(session, [0, 1, 0, 1, 0, 1, 0])
        with self.assertRaises(GameOverError):
            apply_move(session, 2)
        self.assertEqual(len(session.moves_made), 7)

    def test_given_full_column_when_moving_there_then_rejected_and_same_player(self):
        session = GameSession()
        play(session, [0] * 6)
        self.assertEqual(session.active_player, PieceType.RED)
        with self.assertRaises(ColumnFullError):
            apply_move(session, 0)
        self.assertEqual(session.active_player, PieceType.RED)
        self.assertEqual(len(session.moves_made), 6)
        self.assertEqual(session.result, GameResult.IN_PROGRESS)

    def test_given_bad_column_when_moving_then_out_of_range_and_catchable_as_move_error(self):
        session = GameSession()
        for column in (-1, 7):
            with self.assertRaises(MoveError):
                apply_move(session, column)
        with self.assertRaises(OutOfRangeError):
            apply_move(session, 7)
        self.assertEqual(session.grid.piece_count, 0)

    def test_given_non_integer_column_when_moving_then_out_of_range_and_same_player(self):
        session = GameSession()
        for column in (2.9, "x"):
            with self.assertRaises(OutOfRangeError):
                apply_move(session, column)
        self.assertEqual(session.grid.piece_count, 0)
        self.assertEqual(session.moves_made, [])
        self.assertEqual(session.active_player, PieceType.RED)

    def test_given_tiny_grid_when_filled_without_line_then_draw(self):
        session = GameSession(width=2, height=2)
        outcome = play(session, [0, 0, 1, 1])
        self.assertEqual(outcome.result, GameResult.DRAW)
        self.assertTrue(session.is_game_over())
        self.assertIsNone(session.winner)

    def test_given_lower_threshold_when_three_stack_then_win(self):
        session = GameSession(threshold=3)
        outcome = play(session, [0, 1, 0, 1, 0])
        self.assertEqual(outcome.result, GameResult.RED_WIN)

    def test_given_gap_in_bottom_row_when_skip_policy_then_gap_bridged(self):
        session = GameSession(gap_policy=GapPolicy.SKIP)
        outcome = play(session, [0, 0, 1, 1, 3, 3, 4])
        self.assertEqual(outcome.result, GameResult.RED_WIN)
        self.assertNotIn((2, 0), outcome.matches.without_duplicates())

    def test_given_gap_in_bottom_row_when_break_policy_then_play_continues(self):
        session = GameSession(gap_policy=GapPolicy.BREAK)
        outcome = play(session, [0, 0, 1, 1, 3, 3, 4])
        self.assertEqual(outcome.result, GameResult.IN_PROGRESS)
        self.assertEqual(session.active_player, PieceType.BLUE)

    def test_given_detector_and_threshold_when_creating_session_then_value_error(self):
        with self.assertRaises(ValueError):
            GameSession(threshold=3, detector=MatchDetector())
        with self.assertRaises(ValueError):
            GameSession(gap_policy=GapPolicy.BREAK, detector=MatchDetector())

    def test_given_detector_only_when_playing_then_detector_threshold_used(self):
        session = GameSession(detector=MatchDetector(threshold=3))
        outcome = play(session, [0, 1, 0, 1, 0])
        self.assertEqual(outcome.result, GameResult.RED_WIN)

    def test_given_two_sessions_when_playing_one_then_other_untouched(self):
        first, second = GameSession(), GameSession()
        apply_move(first, 0)
        self.assertEqual(second.grid.piece_count, 0)
        self.assertEqual(second.active_player, PieceType.RED)

    def test_given_finished_game_when_reset_then_fresh_state(self):
        session = GameSession(first_player=PieceType.BLUE)
        play(session, [0, 1, 0, 1, 0, 1, 0])
        self.assertEqual(session.winner, PieceType.BLUE)
        session.reset()
        self.assertEqual(session.result, GameResult.IN_PROGRESS)
        self.assertEqual(session.active_player, PieceType.BLUE)
        self.assertEqual(session.grid.piece_count, 0)
        self.assertEqual(session.moves_made, [])


if __name__ == '__main__':
    unittest.main()
