# app/core/logging.py
import logging
import sys

from app.core.config import get_settings


def setup_logging() -> logging.Logger:
    """
    Sets up the application logger with a single console handler.
    """
    logger = logging.getLogger("community_desk")
    if logger.handlers:
        return logger
    logger.setLevel(get_settings().LOG_LEVEL.upper())

    console_handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)
    return logger


logger = setup_logging()
