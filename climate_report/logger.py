"""
This file configures the logger for the climate report.
"""

import logging
import sys


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors log messages by level.

    Colors are only applied when the target stream is a terminal, so
    redirected logs stay plain text.
    """

    COLORS = {
        "DEBUG": "\033[0;96m",  # Cyan
        "INFO": "",
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str = None, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record):
        message = super().format(record)
        if not self.use_color:
            return message

        log_color = self.COLORS.get(record.levelname, self.RESET)
        return f"{log_color}{message}{self.RESET}"


def config_logger(debug: bool = False, stream=None) -> None:
    """
    Configure the root logger with the colored formatter.

    Args:
        debug (bool, optional): Log at DEBUG level instead of INFO.
        stream (optional): Where log lines go. Defaults to stderr, keeping
            stdout free for the report.
    """
    stream = stream if stream is not None else sys.stderr
    logger = logging.getLogger()

    # Remove any existing handlers to avoid duplication
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    use_color = hasattr(stream, "isatty") and stream.isatty()
    handler.setFormatter(
        ColoredFormatter("[%(asctime)s] %(levelname)s: %(message)s", use_color)
    )

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.addHandler(handler)
