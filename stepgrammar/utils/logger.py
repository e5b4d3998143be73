"""Logging setup with coloured console output"""
import logging
import os
import sys
from typing import Optional

from colorama import Fore, Style, init as colorama_init

colorama_init()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "STEPGRAMMAR_LOG_LEVEL"

LEVEL_COLOURS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColouredFormatter(logging.Formatter):
    """Formatter that colours the level name"""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        colour = LEVEL_COLOURS.get(record.levelno)
        if not colour:
            return message
        return message.replace(record.levelname, f"{colour}{record.levelname}{Style.RESET_ALL}", 1)


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Create a logger with a single coloured stream handler"""
    logger = logging.getLogger(name)

    level_name = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColouredFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
