from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Dict, Optional

import typer
import yaml
from dotenv import find_dotenv, load_dotenv

from .core import GeneratorSpec, Orchestrator, Registry, Sequence, build_registry
from .logging import get_logger
from .utils import log_file


def load_env() -> None:
    """Load `.env` from the working directory (the Rails checkout) without overriding."""
    load_dotenv(find_dotenv(usecwd=True))


# Must run before the first get_logger call so QUILT_LOG_LEVEL from .env applies.
load_env()

app = typer.Typer(add_completion=False, help="Install quilt_rails into a Rails application")
log = get_logger("orchestrator.cli")

GENERATORS_PKG = "src.generators"
INSTALL = "quilt_rails:install"
DEFAULT_CONFIG = Path("configs/base.yaml")


def load_config(path: str | Path | None) -> dict:
    if path is None:
        if not DEFAULT_CONFIG.exists():
            return {}
        path = DEFAULT_CONFIG
    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _section(params: dict, key: str) -> dict:
    section = params.get(key)
    if not isinstance(section, dict):
        section = params[key] = {}
    return section


def build_params(
    config: Optional[str], app_dir: Optional[str] = None, pretend: bool = False
) -> dict:
    params = load_config(config)
    if app_dir:
        _section(params, "project")["app_dir"] = app_dir
    if pretend:
        _section(params, "generators")["pretend"] = True
    path = log_file(params)
    if path:
        get_logger("orchestrator", log_file=path)
    return params


def discover_generators(package: str = GENERATORS_PKG) -> Registry:
    """Import all modules in the generators package and register what they declare."""
    specs: Dict[str, GeneratorSpec] = {}
    sequences: Dict[str, Sequence] = {}
    try:
        pkg = importlib.import_module(package)
    except ModuleNotFoundError:
        log.warning("No generators package found.")
        return Registry()
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{package}."):
        try:
            mod = importlib.import_module(m.name)
        except Exception as e:  # noqa: BLE001
            log.warning("Failed to import %s: %s", m.name, e)
            continue
        for attr_name in dir(mod):
            obj = getattr(mod, attr_name)
            if isinstance(obj, Sequence):
                sequences[obj.name] = obj
                continue
            spec = getattr(obj, "_generator_spec", None)
            if isinstance(spec, GeneratorSpec):
                specs[spec.name] = spec
    return build_registry(specs.values(), sequences.values())


@app.command("list")
def list_generators():
    """List discovered generators and sequences."""
    registry = discover_generators()
    if not len(registry):
        typer.echo(
            "No generators discovered. Create modules under `generators/` and decorate functions with @generator()."
        )
        raise typer.Exit(code=0)
    typer.echo("Discovered generators:")
    for name in registry.names():
        kind = " (sequence)" if name in registry.sequences else ""
        desc = registry.describe(name)
        typer.echo(f"- {name}{kind}" + (f": {desc}" if desc else ""))


@app.command()
def plan(name: str = typer.Argument(INSTALL, help="Generator or sequence to expand")):
    """Show the leaf generators a run would execute, in order."""
    registry = discover_generators()
    if name not in registry:
        typer.echo(f"Generator not found: {name}")
        raise typer.Exit(code=1)
    for i, leaf in enumerate(registry.expand(name), start=1):
        typer.echo(f"{i}. {leaf}")


@app.command("run")
def run_generator(
    name: str = typer.Argument(..., help="Generator or sequence to run"),
    config: Optional[str] = typer.Option(None, help="Path to YAML config (default: configs/base.yaml if present)"),
    app_dir: Optional[str] = typer.Option(None, help="Rails application root"),
    pretend: bool = typer.Option(False, help="Log generate commands without running them"),
):
    """Run a single generator or sequence by name."""
    registry = discover_generators()
    if name not in registry:
        typer.echo(f"Generator not found: {name}")
        raise typer.Exit(code=1)
    params = build_params(config, app_dir, pretend)
    sequence = registry.sequences.get(name)
    if sequence is None:
        sequence = Sequence(name=f"run.{name}", namespace="", steps=(name,))
    Orchestrator(registry, name=sequence.name).run(sequence, params)


@app.command()
def install(
    config: Optional[str] = typer.Option(None, help="Path to YAML config (default: configs/base.yaml if present)"),
    app_dir: Optional[str] = typer.Option(None, help="Rails application root"),
    pretend: bool = typer.Option(False, help="Log generate commands without running them"),
):
    """Install sewing-kit and quilt into the Rails application."""
    registry = discover_generators()
    missing = registry.missing(INSTALL)
    if missing:
        typer.echo(
            "Missing required generators: "
            + ", ".join(missing)
            + "\nCreate them under src/generators/ and decorate with @generator(name=...)."
        )
        raise typer.Exit(code=1)
    params = build_params(config, app_dir, pretend)
    Orchestrator(registry, name=INSTALL).run(registry.sequences[INSTALL], params)


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
