"""Logging setup for the command line tool."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

LOGGER_NAME = "folder_consolidator"


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Optional[Path] = None,
    stream: Optional[Any] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Warnings go to stderr (everything with ``verbose``); a log file, when
    given, receives the full debug trail.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to: {log_file}")

    return logger
