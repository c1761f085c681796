"""Tests for logging setup."""

import logging

from docscope.logging_config import VERBOSE_FORMAT, setup_logging


class TestSetupLogging:
    def test_level_and_no_propagation(self):
        logger = setup_logging(level="ERROR", force=True)
        assert logger.name == "docscope"
        assert logger.level == logging.ERROR
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_verbose_lowers_level_to_info(self):
        logger = setup_logging(level="WARNING", verbose=True, force=True)
        assert logger.level == logging.INFO
        assert logger.handlers[0].formatter._fmt == VERBOSE_FORMAT

    def test_verbose_keeps_debug(self):
        logger = setup_logging(level="DEBUG", verbose=True, force=True)
        assert logger.level == logging.DEBUG

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "docscope.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), force=True)
        logging.getLogger("docscope.core.extractor").info("extracting")
        for handler in logger.handlers:
            handler.flush()

        assert "extracting" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
