"""
Logging configuration for the batch entry points.
"""

from __future__ import annotations

import logging
import sys

# Library packages whose module loggers are routed to the configured handlers.
LOGGER_NAMES: tuple[str, ...] = ("batch", "recognition", "notation", "inkml")


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """
    Configure the package loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also write logs to.
    """

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers: list[logging.Handler] = []
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Re-running setup must not duplicate output.
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("batch").debug("Logging initialized.")
