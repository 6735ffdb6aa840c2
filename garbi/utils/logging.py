"""Logging setup with verbosity levels and file logging."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

# Client libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("googleapiclient", "google_auth_httplib2", "httpx", "httpcore", "openai")

_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Union[str, Path] = "logs",
) -> logging.Logger:
    """
    Set up console and file logging.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2=DEBUG, 3=DEBUG including client libraries
        log_file: Log file path. If None, a timestamped file under ``log_dir``.
        log_dir: Directory for the default log file

    Returns:
        Logger for this module
    """
    log_level = _LEVELS.get(verbosity, logging.DEBUG)

    if log_file is None:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"garbi_{timestamp}.log"
    else:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    # File always gets everything
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    library_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized. Verbosity: {verbosity}, Log file: {log_file}")

    return logger


def parse_verbosity(args: List[str]) -> int:
    """
    Parse verbosity level from command line arguments.

    Args:
        args: Command line arguments

    Returns:
        Verbosity level (0-3); the last flag wins
    """
    verbosity = 0
    for arg in args:
        if arg in ("-v", "-vv", "-vvv"):
            verbosity = len(arg) - 1
    return verbosity


def strip_verbosity_flags(args: List[str]) -> List[str]:
    """Command line arguments without the verbosity flags."""
    return [arg for arg in args if arg not in ("-v", "-vv", "-vvv")]
