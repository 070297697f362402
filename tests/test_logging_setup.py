"""
Tests for console and file logging setup.
"""

import logging
import unittest
import tempfile
from pathlib import Path

from waveplan.logging_setup import setup_logging

LOGGER_NAME = "waveplan.tests.logging"


class TestSetupLogging(unittest.TestCase):
    """Test handler configuration on a dedicated logger."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.log_path = Path(self.temp_dir.name) / "logs" / "run.log"
        self.logger = logging.getLogger(LOGGER_NAME)

    def tearDown(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.temp_dir.cleanup()

    def file_handlers(self):
        return [h for h in self.logger.handlers if isinstance(h, logging.FileHandler)]

    def test_console_handler_once(self):
        setup_logging(logging.INFO, name=LOGGER_NAME)
        setup_logging(logging.DEBUG, name=LOGGER_NAME)

        self.assertEqual(len(self.logger.handlers), 1)
        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertEqual(self.logger.handlers[0].level, logging.DEBUG)

    def test_log_file_with_existing_handler(self):
        """A log file is added even when the logger already has a handler."""
        self.logger.addHandler(logging.StreamHandler())

        setup_logging(logging.INFO, log_file=self.log_path, name=LOGGER_NAME)
        self.logger.info("planned 3 waves")
        for handler in self.logger.handlers:
            handler.flush()

        self.assertEqual(len(self.file_handlers()), 1)
        self.assertIn("planned 3 waves", self.log_path.read_text())

    def test_log_file_added_once(self):
        setup_logging(logging.INFO, log_file=self.log_path, name=LOGGER_NAME)
        setup_logging(logging.INFO, log_file=self.log_path, name=LOGGER_NAME)

        self.assertEqual(len(self.file_handlers()), 1)
        # Console handler plus file handler
        self.assertEqual(len(self.logger.handlers), 2)


if __name__ == '__main__':
    unittest.main()
