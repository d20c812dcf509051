import unittest

from dropfour.debug import DebugLevel, DebugManager


class TestDebugManager(unittest.TestCase):
    def setUp(self):
        self.manager = DebugManager("dropfour.tests")

    def test_given_level_when_checking_then_more_verbose_levels_filtered(self):
        self.manager.configure(level=DebugLevel.INFO)
        self.assertTrue(self.manager.is_enabled_for(DebugLevel.WARNING))
        self.assertTrue(self.manager.is_enabled_for(DebugLevel.INFO))
        self.assertFalse(self.manager.is_enabled_for(DebugLevel.DEBUG))

    def test_given_components_when_checking_then_only_listed_ones_pass(self):
        self.manager.configure(level=DebugLevel.TRACE, components=["grid"])
        self.assertTrue(self.manager.is_enabled_for(DebugLevel.DEBUG, "grid"))
        self.assertFalse(self.manager.is_enabled_for(DebugLevel.DEBUG, "detector"))
        self.manager.configure(components=[])
        self.assertTrue(self.manager.is_enabled_for(DebugLevel.DEBUG, "detector"))

    def test_given_level_string_when_setting_then_level_changes(self):
        self.assertTrue(self.manager.set_from_string("Debug"))
        self.assertEqual(self.manager.level, DebugLevel.DEBUG)
        self.assertFalse(self.manager.set_from_string("chatty"))
        self.assertEqual(self.manager.level, DebugLevel.DEBUG)

    def test_given_disabled_when_checking_then_nothing_passes(self):
        self.manager.configure(level=DebugLevel.TRACE, enabled=False)
        self.assertFalse(self.manager.is_enabled_for(DebugLevel.ERROR))

    def test_given_timer_when_ended_then_elapsed_returned_once(self):
        self.manager.start_timer("scan")
        elapsed = self.manager.end_timer("scan")
        self.assertGreaterEqual(elapsed, 0.0)
        self.assertIsNone(self.manager.end_timer("scan"))

    def test_given_records_when_logging_then_component_prefixed(self):
        self.manager.configure(level=DebugLevel.INFO)
        with self.assertLogs("dropfour.tests", level="INFO") as logs:
            self.manager.info("piece dropped", "grid")
            self.manager.debug("hidden", "grid")
        self.assertEqual(len(logs.records), 1)
        self.assertIn("[grid] piece dropped", logs.output[0])


if __name__ == '__main__':
    unittest.main()
