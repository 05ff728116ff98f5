"""Small helpers for reading installer settings from config params."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Dict, List, Optional


DEFAULT_COMMAND = ["bin/rails", "generate"]


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def _as_args(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return shlex.split(value)
    return [str(v) for v in value]


def app_dir(p: Dict) -> Path:
    return Path(_get(p, "project", "app_dir", default="."))


def log_file(p: Dict) -> Optional[Path]:
    path = _get(p, "project", "log_file")
    return Path(path) if path else None


def rails_command(p: Dict) -> List[str]:
    return _as_args(_get(p, "generators", "command", default=DEFAULT_COMMAND))


def generator_args(p: Dict) -> List[str]:
    return _as_args(_get(p, "generators", "args", default=[]))


def generator_env(p: Dict) -> Dict[str, str]:
    env = _get(p, "generators", "env", default={})
    return {str(k): str(v) for k, v in env.items()}


def pretend(p: Dict) -> bool:
    return bool(_get(p, "generators", "pretend", default=False))
