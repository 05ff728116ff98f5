"""Sequential runner for namespaced install generators.

Provides the generator registry, the Sequence/Orchestrator primitives and a Typer CLI.
"""

from .core import (  # re-export for convenience
    GeneratorSpec,
    Orchestrator,
    Registry,
    Sequence,
    UnknownGeneratorError,
    generator,
)

__all__ = [
    "GeneratorSpec",
    "Orchestrator",
    "Registry",
    "Sequence",
    "UnknownGeneratorError",
    "generator",
]
