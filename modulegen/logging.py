"""Logger hierarchy shared by the CLI and the HTTP service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

_LOGGER_NAME = "modulegen"
_CONSOLE_FORMAT = "[modulegen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Marks handlers installed here so reconfiguring leaves foreign handlers alone.
_OWNED = "_modulegen_owned"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``modulegen.<name>``, or the package logger itself."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Send modulegen records to the console and, optionally, to ``log_file``.

    Safe to call repeatedly: handlers from a previous call are replaced, so
    running several commands in one process never duplicates output.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    _attach(logger, console, level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        _attach(logger, sink, level)

    return logger


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    setattr(handler, _OWNED, True)
    logger.addHandler(handler)


__all__ = ["configure_logging", "get_logger"]
