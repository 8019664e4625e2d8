"""
Logging Configuration
Sets up the package logger for the command-line tool.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'displacedpoints' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("displacedpoints")
    logger.setLevel(level)

    # Repeated calls (tests, re-runs of main) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stderr; stdout carries only the run summary)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")


def verbosity_to_level(verbosity: int) -> int:
    """Map the number of -v flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING
