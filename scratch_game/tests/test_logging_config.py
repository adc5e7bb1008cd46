import logging
import unittest

from pythonjsonlogger import jsonlogger

from scratch_game.config import TestingConfig
from scratch_game.logging_config import RoundIdFilter, configure_logging


class JsonTestingConfig(TestingConfig):
    LOG_FORMAT = 'json'
    LOG_LEVEL = 'WARNING'


class TestLoggingConfig(unittest.TestCase):

    def tearDown(self):
        package_logger = logging.getLogger('scratch_game')
        package_logger.handlers.clear()
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)

    def test_round_id_defaults_to_na(self):
        record = logging.LogRecord('scratch_game', logging.INFO, __file__, 1, 'msg', None, None)
        self.assertTrue(RoundIdFilter().filter(record))
        self.assertEqual(record.round_id, 'N/A')

    def test_round_id_is_kept(self):
        record = logging.LogRecord('scratch_game', logging.INFO, __file__, 1, 'msg', None, None)
        record.round_id = 'abc123'
        RoundIdFilter().filter(record)
        self.assertEqual(record.round_id, 'abc123')

    def test_text_format(self):
        logger = configure_logging(TestingConfig)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertNotIsInstance(logger.handlers[0].formatter, jsonlogger.JsonFormatter)

    def test_json_format_and_level_override(self):
        logger = configure_logging(JsonTestingConfig, level='ERROR')
        self.assertEqual(logger.level, logging.ERROR)
        self.assertIsInstance(logger.handlers[0].formatter, jsonlogger.JsonFormatter)

    def test_reconfiguring_replaces_handler(self):
        configure_logging(TestingConfig)
        logger = configure_logging(TestingConfig)
        self.assertEqual(len(logger.handlers), 1)


if __name__ == '__main__':
    unittest.main()
