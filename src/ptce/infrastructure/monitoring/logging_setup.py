"""Logging setup utilities."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from .structured_logging import JSONFormatter

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    json_format: bool = False,
    enable_colors: bool = True,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level, as a number or a name such as "INFO"
        log_file: Optional rotating log file path
        json_format: Emit one JSON object per record instead of plain text
        enable_colors: Color level names when writing to a terminal
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter: logging.Formatter = (
        JSONFormatter() if json_format else logging.Formatter(DEFAULT_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if not json_format and enable_colors and hasattr(sys.stderr, "isatty") and sys.stderr.isatty():
        console_handler.setFormatter(ColoredFormatter(DEFAULT_FORMAT))
    else:
        console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Reduce verbosity of third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        color = self.COLORS.get(record.levelname, "")
        if color:
            levelname = record.levelname
            message = message.replace(levelname, f"{color}{levelname}{self.RESET}", 1)

        return message
