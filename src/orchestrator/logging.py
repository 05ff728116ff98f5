from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
ROOT_LOGGER = "orchestrator"

_configured = False


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    level = getattr(logging, os.getenv("QUILT_LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger(ROOT_LOGGER).setLevel(level)
    _configured = True


def get_logger(name: str, log_file: Path | str | None = None) -> logging.Logger:
    """Return a named logger, attaching a rotating file handler if asked.

    A logger holds at most one log file; asking for a different path swaps it.
    """
    _ensure_base_logger()
    logger = logging.getLogger(name)
    if not log_file:
        return logger
    log_file = Path(os.path.abspath(log_file))
    current = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    if any(Path(h.baseFilename) == log_file for h in current):
        return logger
    for h in current:
        logger.warning("Switching log file from %s to %s", h.baseFilename, log_file)
        logger.removeHandler(h)
        h.close()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
