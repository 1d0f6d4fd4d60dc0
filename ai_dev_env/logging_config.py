"""
Centralized logging configuration for ai-dev-env.

Console output goes to stdout (stderr when a JSON report owns stdout) with
colored level symbols when attached to a terminal; an optional log file
always receives DEBUG output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO


# Between INFO and WARNING
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LOGGER_NAME = "ai_dev_env"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    debug: bool = False,
    quiet: bool = False,
    propagate: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        debug: Enable debug output (overrides level)
        quiet: Suppress console output (file only)
        propagate: Allow log propagation (useful for testing)
        stream: Console stream (defaults to stdout)

    Returns:
        Configured logger instance
    """
    if debug:
        effective_level = "DEBUG"
    elif quiet:
        effective_level = "WARNING"
    else:
        effective_level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, effective_level))

    # Clear existing handlers
    logger.handlers.clear()

    if not quiet:
        console_stream = stream or sys.stdout
        console_handler = logging.StreamHandler(console_stream)
        console_handler.setLevel(getattr(logging, effective_level))
        console_handler.setFormatter(
            ColoredFormatter("%(levelname_colored)s%(message)s", use_colors=console_stream.isatty())
        )
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        # The file handler needs DEBUG records even when the console does not
        logger.setLevel(logging.DEBUG)

    logger.propagate = propagate

    return logger


class ColoredFormatter(logging.Formatter):
    """
    Formatter with colored output for different log levels.

    Plain INFO lines carry no prefix so that progress output reads like
    ordinary terminal text.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '',
        'SUCCESS': '\033[32m',    # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[1;31m', # Bold Red
    }
    RESET = '\033[0m'

    SYMBOLS = {
        'DEBUG': '[DEBUG]',
        'INFO': '',
        'SUCCESS': '✅',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🚨',
    }

    def __init__(self, fmt: str, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        levelname = record.levelname
        symbol = self.SYMBOLS.get(levelname, levelname)

        if not symbol:
            record.levelname_colored = ""
        elif self.use_colors:
            color = self.COLORS.get(levelname, '')
            record.levelname_colored = f"{color}{symbol}{self.RESET} "
        else:
            record.levelname_colored = f"{symbol} "

        return super().format(record)


def log_success(logger: logging.Logger, msg: str) -> None:
    """Log a message at the SUCCESS level."""
    logger.log(SUCCESS, msg)
