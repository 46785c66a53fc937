"""Logging setup for doc-pilot.

Configures the package logger with a console handler on stderr and an
optional file handler. Level and format come from config.yaml.
"""

import logging
import sys
from typing import Optional


def setup_logging(
    level: str = "WARNING",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure the doc_pilot logger with console and optional file output.

    Clears any existing handlers to prevent duplicate log entries across
    calls. Console output goes to stderr so that stdout only carries the
    fetched documentation.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        log_file: Optional file path for log output.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger("doc_pilot")
    package_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    package_logger.setLevel(numeric_level)

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.debug("Logging initialized at level %s", level)
    return package_logger
