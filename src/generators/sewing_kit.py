"""sewing-kit toolchain generator."""

from ..orchestrator import generator
from .rails import generate


@generator(name="quilt_rails:sewing_kit:install")
def sewing_kit_install(params: dict):
    """Install sewing-kit (webpack, lint and test tooling) into the app."""
    generate("quilt_rails:sewing_kit:install", params)
