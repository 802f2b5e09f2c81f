"""
Logging configuration for the distribution engine.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(
    name: str = "distribution",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Calling this again for an existing logger only adjusts its level and,
    if given, attaches the extra file handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    if log_file:
        path = os.path.abspath(log_file)
        attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == path
            for h in logger.handlers
        )
        if not attached:
            file_handler = logging.FileHandler(path)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


# Default logger for the application
logger = setup_logger()
