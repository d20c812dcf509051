"""
cli.py - Command-line interface for dropfour

Provides a hot-seat game in the terminal, a position checker that prints the
matches found on a given grid, and a small benchmark of placement and match
detection.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from dropfour.debug import debug, DebugLevel
from dropfour.errors import MoveError
from dropfour.game.detector import MatchDetector
from dropfour.game.grid import Grid
from dropfour.game.rules import GameSession, apply_move
from dropfour.utils import (HEIGHT, MATCH_THRESHOLD, WIDTH, GapPolicy,
                            PieceType, parse_rows)

QUIT = "quit"
RESTART = "restart"


def positive_int(text: str) -> int:
    """argparse type for sizes and thresholds, which must be at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


class SimpleCLI:
    """Simple command-line interface for dropfour."""

    def __init__(self, input_func: Callable[[str], str] = input, seed: Optional[int] = None):
        self.args = None
        self.session: Optional[GameSession] = None
        self.input_func = input_func
        self.rng = random.Random(seed)

    def build_parser(self) -> argparse.ArgumentParser:
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--width', type=positive_int, default=WIDTH, help='Number of columns')
        common.add_argument('--height', type=positive_int, default=HEIGHT, help='Number of rows')
        common.add_argument('--threshold', type=positive_int, default=MATCH_THRESHOLD,
                            help='Pieces in a line needed to win')
        common.add_argument('--gap-policy', choices=[p.value for p in GapPolicy],
                            default=GapPolicy.SKIP.value,
                            help='Whether an empty cell interrupts a run')
        common.add_argument('--debug', action='store_true', help='Enable debug logging')
        common.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        common.add_argument('--log-file', default=None, help='Also write logs to this file')

        parser = argparse.ArgumentParser(description='dropfour CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[common],
                                            help='Play a game in the terminal')
        play_parser.add_argument('--ai', choices=['random', 'none'], default='none',
                                 help='Let a random mover play Blue')

        test_parser = subparsers.add_parser('test', parents=[common],
                                            help='Show the matches on a position')
        test_parser.add_argument('--position', type=str, required=True,
                                 help="Rows top first, separated by '/', '.' for empty")

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                                 help='Benchmark placement and detection')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of games to simulate')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)
        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI. Returns the process exit code."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def new_session(self) -> GameSession:
        return GameSession(self.args.width, self.args.height, self.args.threshold,
                           GapPolicy(self.args.gap_policy))

    def play_game(self) -> None:
        """Play a game in the terminal until someone wins, it's a draw, or 'q'."""
        self.session = self.new_session()
        print("Starting a new game!")
        print(f"Enter a column number (0-{self.session.width - 1}) to drop a piece.")
        print("Other commands: 'q' to quit, 'r' to restart.")
        print(self.session.render())

        while not self.session.is_game_over():
            player = self.session.active_player
            if player == PieceType.BLUE and self.args.ai == 'random':
                move = self.get_ai_move()
                print(f"AI plays column {move}")
            else:
                move = self.get_human_move(player)
                if move is None:
                    continue
                if move == QUIT:
                    print("Quitting game.")
                    return
                if move == RESTART:
                    self.session.reset()
                    print("Game restarted.")
                    print(self.session.render())
                    continue

            try:
                outcome = apply_move(self.session, move)
            except MoveError as err:
                print(f"Invalid move: {err}")
                continue

            print(self.session.render())
            if outcome.is_winning:
                print(f"{outcome.piece_type} player wins!")
            elif not outcome.is_game_over:
                print(f"{self.session.active_player} player to move")

        if self.session.winner is None:
            print("It's a draw!")

    def get_human_move(self, player: PieceType):
        """
        Read one move from the terminal.

        Returns:
            Column index, QUIT, RESTART, or None if the input was not understood
        """
        try:
            user_input = self.input_func(f"{player} ({player.symbol}) move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART
        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

    def get_ai_move(self) -> int:
        return self.rng.choice(self.session.valid_moves())

    def test_position(self) -> int:
        """Load a position and report every match on it."""
        try:
            rows = parse_rows(self.args.position)
            grid = Grid.from_rows(rows, height=max(len(rows), self.args.height))
        except (ValueError, MoveError) as err:
            print(f"Error parsing position: {err}")
            return 2

        detector = MatchDetector(self.args.threshold, GapPolicy(self.args.gap_policy))
        matches = grid.get_matches(detector)

        print("Loaded position:")
        print(grid.render())
        if matches.is_empty():
            print("No matches")
        else:
            for match in matches:
                cells = ", ".join(str(pos) for pos in match)
                print(f"{match.direction.name.capitalize()} match of {len(match)}: {cells}")
            print(grid.render(highlight=matches.without_duplicates()))

        print(f"Empty cells: {grid.width * grid.height - grid.piece_count}")
        print(f"Valid moves: {grid.valid_columns()}")
        return 0

    def benchmark(self) -> None:
        """Time random games, placement and match detection."""
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} games...")

        debug.start_timer("games")
        moves = 0
        for _ in range(iterations):
            session = self.new_session()
            while not session.is_game_over():
                apply_move(session, self.rng.choice(session.valid_moves()))
                moves += 1
        games_time = debug.end_timer("games", "cli")
        print(f"Played {iterations} games with {moves} moves: {games_time:.6f} seconds total, "
              f"{games_time / max(moves, 1) * 1000:.6f} ms per move")

        grid = Grid(self.args.width, self.args.height)
        for x in range(grid.width):
            for y in range(grid.height):
                grid.insert((x, y), (x + y) % 2)
        detector = MatchDetector(self.args.threshold, GapPolicy(self.args.gap_policy))
        debug.start_timer("detection")
        for _ in range(iterations):
            detector.find_matches(grid)
        detection_time = debug.end_timer("detection", "cli")
        print(f"Scanning a full grid {iterations} times: {detection_time:.6f} seconds total, "
              f"{detection_time / max(iterations, 1) * 1000:.6f} ms per scan")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
