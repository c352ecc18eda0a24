"""Application logger with coloured levels and full timestamps."""

from __future__ import annotations

import logging

_LOGGER_NAME = "productsvc"
_RESET = "\033[0m"
_COLORS = {
    logging.DEBUG: "\033[37m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}


class _ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _COLORS.get(record.levelno, "")
        level = f"{color}{record.levelname[:4]}{_RESET}"
        timestamp = self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z")
        text = f"{level}[{timestamp}] {record.getMessage()}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


class _ConsoleHandler(logging.StreamHandler):
    pass


def setup_logger() -> logging.Logger:
    """Configure the service logger, replacing any console handler set earlier."""
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, _ConsoleHandler)]:
        logger.removeHandler(handler)

    handler = _ConsoleHandler()
    handler.setFormatter(_ColorFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    logger.info("Logger initiated.")
    return logger


def get_logger() -> logging.Logger:
    """Return the service logger, configuring it on first use."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not any(isinstance(h, _ConsoleHandler) for h in logger.handlers):
        return setup_logger()
    return logger