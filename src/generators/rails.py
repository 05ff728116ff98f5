"""Bridge to the external `rails generate` command.

Leaf generators do no templating themselves; each one hands its identifier to
the Rails generator subsystem of the target application.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from typing import Dict

from ..orchestrator.logging import get_logger
from ..orchestrator.utils import (
    app_dir,
    generator_args,
    generator_env,
    pretend,
    rails_command,
)


log = get_logger("orchestrator.generate")


def generate(identifier: str, params: Dict, *args: str) -> None:
    """Run `rails generate <identifier>` inside the configured app directory.

    Raises subprocess.CalledProcessError on a non-zero exit and
    FileNotFoundError when the app directory or the command is missing.
    """
    cmd = [*rails_command(params), identifier, *generator_args(params), *args]
    cwd = app_dir(params)
    log.info("generate %s", identifier)
    if pretend(params):
        log.info("Pretend: %s (in %s)", shlex.join(cmd), cwd)
        return
    if not cwd.is_dir():
        raise FileNotFoundError(f"Rails app directory not found: {cwd}")
    env = dict(os.environ)
    env.update(generator_env(params))
    subprocess.run(cmd, cwd=cwd, env=env, check=True)
