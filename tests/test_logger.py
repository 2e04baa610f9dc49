import logging
import os
import tempfile
import unittest
from unittest.mock import patch

from core.logger import LOG_DIR_ENV, LOG_FILE_NAME, get_logger


class TestLogDirectory(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _close(self, logger):
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_log_dir_comes_from_environment(self):
        log_dir = os.path.join(self.tmp.name, "nested", "logs")
        with patch.dict(os.environ, {LOG_DIR_ENV: log_dir}):
            logger = get_logger("tests.log_dir_from_env")
        self.addCleanup(self._close, logger)

        logger.debug("written to the configured directory")
        for handler in logger.handlers:
            handler.flush()

        log_file = os.path.join(log_dir, LOG_FILE_NAME)
        self.assertTrue(os.path.isfile(log_file))
        with open(log_file, encoding="utf-8") as f:
            self.assertIn("written to the configured directory", f.read())

    def test_handlers_attached_once(self):
        with patch.dict(os.environ, {LOG_DIR_ENV: self.tmp.name}):
            first = get_logger("tests.handlers_once")
            second = get_logger("tests.handlers_once")
        self.addCleanup(self._close, first)

        self.assertIs(first, second)
        self.assertEqual(len(first.handlers), 2)
        self.assertEqual(first.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
