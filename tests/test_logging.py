"""Tests for logger setup: env-driven level and the rotating log file."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from src.orchestrator import logging as orch_logging
from src.orchestrator.cli import load_env
from src.orchestrator.logging import ROOT_LOGGER, get_logger


@pytest.fixture
def fresh_logging(monkeypatch):
    """Force the next get_logger call to configure again, and restore the level."""
    root = logging.getLogger(ROOT_LOGGER)
    level = root.level
    monkeypatch.setattr(orch_logging, "_configured", False)
    # setenv first so monkeypatch restores the variable's original absence.
    monkeypatch.setenv("QUILT_LOG_LEVEL", "INFO")
    monkeypatch.delenv("QUILT_LOG_LEVEL")
    yield
    root.setLevel(level)


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def test_level_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("QUILT_LOG_LEVEL", "debug")

    logger = get_logger("orchestrator.test.env")

    assert logger.getEffectiveLevel() == logging.DEBUG


def test_level_from_dotenv_in_working_dir(fresh_logging, tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("QUILT_LOG_LEVEL=WARNING\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    load_env()
    logger = get_logger("orchestrator.test.dotenv")

    assert logger.getEffectiveLevel() == logging.WARNING


def test_same_log_file_added_once(tmp_path):
    logger = get_logger("orchestrator.test.same_file", log_file=tmp_path / "a.log")
    get_logger("orchestrator.test.same_file", log_file=tmp_path / "a.log")

    try:
        assert len(_file_handlers(logger)) == 1
    finally:
        for h in _file_handlers(logger):
            logger.removeHandler(h)
            h.close()


def test_different_log_file_replaces_handler_with_warning(tmp_path):
    name = "orchestrator.test.switch_file"
    logger = get_logger(name, log_file=tmp_path / "first.log")

    get_logger(name, log_file=tmp_path / "second.log")

    try:
        handlers = _file_handlers(logger)
        assert len(handlers) == 1
        assert handlers[0].baseFilename == str(tmp_path / "second.log")
        first = (tmp_path / "first.log").read_text(encoding="utf-8")
        assert "Switching log file" in first
    finally:
        for h in _file_handlers(logger):
            logger.removeHandler(h)
            h.close()
