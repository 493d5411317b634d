"""Colored console logging shared by the API, CLI and background calls."""

import logging
import sys
from datetime import datetime

GREEN = "\x1b[32m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"
DIM = "\x1b[2m"
BOLD = "\x1b[1m"
RESET = "\x1b[0m"

ROOT_LOGGER = "adcopy"


class ConsoleFormatter(logging.Formatter):
    """``[HH:MM:SS] component message``, colored by level.

    The component is the logger name below ``adcopy.``, so ``adcopy.gate``
    prints as ``gate``. Records from the root logger carry no tag.
    """

    LEVEL_COLORS = {
        logging.DEBUG: DIM,
        logging.INFO: "",
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED + BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        color = self.LEVEL_COLORS.get(record.levelno, "")
        component = record.name.removeprefix(ROOT_LOGGER).lstrip(".")
        tag = f"{CYAN}{component}{RESET} " if component else ""
        line = f"{DIM}[{ts}]{RESET} {tag}{color}{record.getMessage()}{RESET}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str = ROOT_LOGGER, level: str | None = None) -> logging.Logger:
    """Return a project logger; the handler lives on the ``adcopy`` root only.

    Child loggers (``adcopy.store``) propagate to it. ``level`` defaults to
    ``settings.log_level``.
    """
    if level is None:
        from adcopy.config import settings

        level = settings.log_level
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ConsoleFormatter())
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logging.getLogger(name)
