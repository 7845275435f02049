import logging
import sys
from typing import Optional

from clouddetect.config.settings import resolve_log_level


class ColoredFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    def __init__(self, use_color: bool = True):
        super().__init__(self.LOG_FORMAT)
        self.use_color = use_color

    def format(self, record):
        # Work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname) if self.use_color else None
        if color:
            record.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        else:
            record.levelname = f"{record.levelname:<8}"
        return super().format(record)


def get_logger(name: str = 'CloudDetect', level: Optional[int] = None) -> logging.Logger:
    """Gets the package logger, attaching the colored handler only once."""
    _logger = logging.getLogger(name)
    if level is None:
        level = resolve_log_level()
    if not _logger.handlers:
        log_handler = logging.StreamHandler()
        log_handler.setFormatter(ColoredFormatter(use_color=sys.stderr.isatty()))
        _logger.addHandler(log_handler)
        _logger.propagate = False
    _logger.setLevel(level)
    return _logger


# Global logger instance shared by every module in the package
logger = get_logger()
