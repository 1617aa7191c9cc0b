from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from .workspace import _work_dir


_LOGGER: logging.Logger | None = None


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the application logger writing to <home>/logs/app.log.

    Creates the directory if needed. Uses rotating file handler. Nothing is
    written to the terminal until ``enable_console`` is called, because the
    editor owns the screen while it runs.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        base = _work_dir() / "logs"
    else:
        base = Path(log_dir)
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "app.log"

    logger = logging.getLogger("gridfolio")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(_formatter())
    logger.addHandler(file_handler)

    _LOGGER = logger
    return logger


def enable_console(logger: logging.Logger | None = None) -> logging.Logger:
    """Mirror log records to stderr for non-interactive commands."""

    logger = logger or get_logger()
    if not any(getattr(h, "_gridfolio_console", False) for h in logger.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(_formatter())
        console._gridfolio_console = True  # type: ignore[attr-defined]
        logger.addHandler(console)
    return logger


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
