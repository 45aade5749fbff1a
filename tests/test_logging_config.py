"""Tests for logging configuration."""

import io
import logging

from folder_consolidator.logging_config import configure_logging, LOGGER_NAME


class TestConfigureLogging:

    def test_stream_only_shows_warnings(self):
        stream = io.StringIO()
        logger = configure_logging(stream=stream)

        logging.getLogger(f"{LOGGER_NAME}.core.mover").info("moved a file")
        logging.getLogger(f"{LOGGER_NAME}.core.mover").warning("could not move")

        output = stream.getvalue()
        assert "could not move" in output
        assert "moved a file" not in output
        assert logger.name == LOGGER_NAME

    def test_verbose_shows_debug(self):
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)

        logging.getLogger(f"{LOGGER_NAME}.core.analyzer").debug("found a file")

        assert "found a file" in stream.getvalue()

    def test_log_file_receives_everything(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = configure_logging(log_file=log_file, stream=io.StringIO())

        logging.getLogger(f"{LOGGER_NAME}.core.mover").info("moved a file")
        for handler in logger.handlers:
            handler.flush()

        assert "moved a file" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path):
        configure_logging(log_file=tmp_path / "run.log", stream=io.StringIO())
        logger = configure_logging(log_file=tmp_path / "run.log", stream=io.StringIO())

        assert len(logger.handlers) == 2
