"""Logging utility with verbosity levels and optional file logging."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up operator console logging.

    Validation diagnostics are logged at ERROR, so they reach the console
    at every verbosity level.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Optional log file path. No file is written when None.

    Returns:
        Configured logger instance
    """
    if verbosity <= 0:
        log_level = logging.WARNING
    elif verbosity == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File handler (always DEBUG level to capture everything)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized. Verbosity: {verbosity}, Log file: {log_file}")

    return logger


def parse_verbosity(args: List[str]) -> int:
    """
    Parse verbosity level from command line arguments.

    Args:
        args: Command line arguments

    Returns:
        Verbosity level (0-3)
    """
    verbosity = 0
    for arg in args:
        if arg == "-v":
            verbosity = 1
        elif arg == "-vv":
            verbosity = 2
        elif arg == "-vvv":
            verbosity = 3
    return verbosity
