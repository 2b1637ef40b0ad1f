"""Tests for the one-time logging setup."""

import io
import logging
import os
import sys
import unittest
from unittest.mock import patch

from rich.console import Console
from rich.logging import RichHandler

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from jsonnice import logs


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level
        patcher = patch.object(logs, '_configured', False)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self.root.handlers[:] = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_configures_once(self):
        console = Console(file=io.StringIO())
        self.assertTrue(logs.setup_logging(logging.WARNING, console=console))
        self.assertTrue(logs._configured)
        self.assertFalse(logs.setup_logging(logging.DEBUG, console=console))

        rich_handlers = [h for h in self.root.handlers if isinstance(h, RichHandler)]
        self.assertEqual(len(rich_handlers), len(
            [h for h in self.saved_handlers if isinstance(h, RichHandler)]) + 1)
        self.assertEqual(self.root.level, logging.WARNING)

    def test_level_filters_records(self):
        out = io.StringIO()
        logs.setup_logging(logging.WARNING, console=Console(file=out, width=200))

        logging.getLogger('jsonnice.test').info("quiet message")
        logging.getLogger('jsonnice.test').error("loud message")

        self.assertNotIn("quiet message", out.getvalue())
        self.assertIn("loud message", out.getvalue())

    def test_level_names(self):
        self.assertEqual(list(logs.LOG_LEVELS), ['debug', 'info', 'warn', 'error'])
        self.assertEqual(logs.LOG_LEVELS['warn'], logging.WARNING)


if __name__ == '__main__':
    unittest.main()
