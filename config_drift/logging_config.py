"""Logging configuration for the config drift checker.

Everything goes to stderr: stdout is reserved for the JSON report.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for different log levels."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, use_color: bool = False):
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def format(self, record):
        if not self.use_color:
            return super().format(record)

        # Work on a copy so other handlers see the plain record
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        record.name = f"\033[34m{record.name}{self.RESET}"  # Blue for logger name
        return super().format(record)


def setup_logging(log_level: Optional[str] = None) -> None:
    """Setup centralized logging on stderr."""

    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter(
        LOG_FORMAT,
        datefmt=DATE_FORMAT,
        use_color=sys.stderr.isatty(),
    ))

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    configure_external_loggers()


def configure_external_loggers() -> None:
    """Configure logging levels for external libraries."""
    external_loggers = {
        'git': logging.WARNING,
        'urllib3': logging.WARNING,
    }

    for logger_name, level in external_loggers.items():
        logging.getLogger(logger_name).setLevel(level)
