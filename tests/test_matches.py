import unittest

from dropfour.game.matches import Match, Matches, MatchKind
from dropfour.utils import MatchDirection, Position


class TestMatch(unittest.TestCase):
    def test_given_coordinates_when_building_straight_match_then_set_semantics(self):
        match = Match.straight([(0, 0), (1, 0), (2, 0), (3, 0), (3, 0)], MatchDirection.HORIZONTAL)
        self.assertEqual(match.kind, MatchKind.STRAIGHT)
        self.assertEqual(len(match), 4)
        self.assertIn((2, 0), match)
        self.assertNotIn((4, 0), match)
        self.assertEqual(list(match)[0], Position(0, 0))

    def test_given_match_when_assigning_then_frozen(self):
        match = Match.straight([(0, 0)])
        with self.assertRaises(AttributeError):
            match.kind = None


class TestMatches(unittest.TestCase):
    def setUp(self):
        self.row = Match.straight([(0, 0), (1, 0), (2, 0), (3, 0)], MatchDirection.HORIZONTAL)
        self.column = Match.straight([(0, 0), (0, 1), (0, 2), (0, 3)], MatchDirection.VERTICAL)

    def test_given_new_collection_when_queried_then_empty(self):
        matches = Matches()
        self.assertTrue(matches.is_empty())
        self.assertEqual(len(matches), 0)
        self.assertEqual(matches.without_duplicates(), set())

    def test_given_two_collections_when_appending_then_order_preserved(self):
        first = Matches([self.row])
        second = Matches()
        second.add(self.column)
        first.append(second)
        self.assertEqual(first.matches, [self.row, self.column])
        self.assertFalse(first.is_empty())
        self.assertEqual(first[1], self.column)

    def test_given_overlapping_matches_when_flattening_then_shared_cell_counted_once(self):
        matches = Matches([self.row, self.column])
        cells = matches.without_duplicates()
        self.assertEqual(len(cells), 7)
        self.assertIn(Position(0, 0), cells)
        self.assertEqual(len(matches), 2)


if __name__ == '__main__':
    unittest.main()
