from __future__ import annotations

import logging
import sys
from typing import TextIO

from promptlint.report import BLUE, BOLD, GREEN, RED, RESET, YELLOW

APP_NAME = "promptlint"

_KEYWORD_COLORS = (
    (("Starting", "Finished"), GREEN),
    (("Error", "Failed"), RED),
    (("Processing", "Validation"), YELLOW),
)


class ProgressFormatter(logging.Formatter):
    """Render records as ``[promptlint] message``, colored by keyword when enabled."""

    def __init__(self, colorize: bool):
        super().__init__()
        self.colorize = colorize

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if not self.colorize:
            return f"[{APP_NAME}] {message}"

        color = RED if record.levelno >= logging.ERROR else _keyword_color(message)
        if color:
            message = f"{color}{message}{RESET}"
        return f"[{BLUE}{BOLD}{APP_NAME}{RESET}] {message}"


def configure_logging(
    *,
    colorize: bool,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ProgressFormatter(colorize))
    logger.addHandler(handler)
    logger.setLevel(logging.WARNING if quiet else logging.INFO)
    logger.propagate = False
    return logger


def _keyword_color(message: str) -> str | None:
    for keywords, color in _KEYWORD_COLORS:
        if any(keyword in message for keyword in keywords):
            return color
    return None
