"""Shared fixtures for the installer tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


class RecordingRegistry:
    """Registry double recording every resolve and every handler call."""

    def __init__(self, fail_resolve: str | None = None, fail_run: str | None = None):
        self.fail_resolve = fail_resolve
        self.fail_run = fail_run
        self.resolved: list[str] = []
        self.executed: list[str] = []

    def resolve(self, identifier: str):
        self.resolved.append(identifier)
        if identifier == self.fail_resolve:
            raise LookupError(f"cannot resolve {identifier}")

        def handler(params: dict) -> None:
            if identifier == self.fail_run:
                raise RuntimeError(f"{identifier} failed")
            self.executed.append(identifier)

        return handler


@pytest.fixture
def recording_registry() -> RecordingRegistry:
    return RecordingRegistry()


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    root = tmp_path / "shop"
    (root / "bin").mkdir(parents=True)
    return root


@pytest.fixture
def rails_calls(monkeypatch):
    """Replace subprocess.run in the Rails bridge and collect its calls."""
    calls: list[dict] = []

    def fake_run(cmd, **kwargs):
        calls.append({"cmd": list(cmd), **kwargs})
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr("src.generators.rails.subprocess.run", fake_run)
    return calls


@pytest.fixture
def make_recording_registry():
    return RecordingRegistry
