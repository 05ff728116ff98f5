from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from .logging import get_logger


Handler = Callable[..., None]


class UnknownGeneratorError(KeyError):
    """Raised when an identifier has no registered generator."""

    def __init__(self, identifier: str):
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"Unknown generator: {self.identifier}"


@dataclass
class GeneratorSpec:
    name: str
    fn: Handler
    description: str = ""


def generator(name: str, description: str = ""):
    """Decorator to declare a generator on a function.

    The wrapped function receives the parsed config as the keyword argument
    `params` and returns nothing; failures are raised.
    """

    def deco(fn: Handler):
        doc = (fn.__doc__ or "").strip().splitlines()
        spec = GeneratorSpec(
            name=name, fn=fn, description=description or (doc[0] if doc else "")
        )
        setattr(fn, "_generator_spec", spec)
        return fn

    return deco


def qualify(namespace: str, step: str) -> str:
    return f"{namespace}:{step}" if namespace else step


@dataclass(frozen=True)
class Sequence:
    """Fixed, ordered list of generator steps under one namespace."""

    name: str
    namespace: str
    steps: tuple[str, ...]
    description: str = ""

    def identifiers(self) -> list[str]:
        return [qualify(self.namespace, s) for s in self.steps]


class Registry:
    """Explicit identifier -> handler mapping injected into the orchestrator."""

    def __init__(self) -> None:
        self.specs: Dict[str, GeneratorSpec] = {}
        self.sequences: Dict[str, Sequence] = {}

    @classmethod
    def from_mapping(cls, handlers: Mapping[str, Handler]) -> "Registry":
        registry = cls()
        for name, fn in handlers.items():
            registry.register(GeneratorSpec(name=name, fn=fn))
        return registry

    def register(self, spec: GeneratorSpec) -> None:
        if spec.name in self.specs:
            raise ValueError(f"Generator already registered: {spec.name}")
        self.specs[spec.name] = spec

    def register_sequence(self, sequence: Sequence) -> None:
        def run_sequence(params: dict) -> None:
            Orchestrator(self, name=sequence.name).run(sequence, params)

        self.register(
            GeneratorSpec(
                name=sequence.name, fn=run_sequence, description=sequence.description
            )
        )
        self.sequences[sequence.name] = sequence

    def resolve(self, identifier: str) -> Handler:
        try:
            return self.specs[identifier].fn
        except KeyError:
            raise UnknownGeneratorError(identifier) from None

    def describe(self, identifier: str) -> str:
        if identifier not in self.specs:
            raise UnknownGeneratorError(identifier)
        return self.specs[identifier].description

    def names(self) -> list[str]:
        return sorted(self.specs)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.specs

    def __len__(self) -> int:
        return len(self.specs)

    def expand(self, identifier: str, _stack: Optional[List[str]] = None) -> list[str]:
        """Flatten a sequence into the leaf generators a run would execute."""
        stack = _stack or []
        if identifier in stack:
            cycle = " → ".join(stack + [identifier])
            raise ValueError(f"Cycle detected in sequence: {cycle}")
        sequence = self.sequences.get(identifier)
        if sequence is None:
            if identifier not in self.specs:
                raise UnknownGeneratorError(identifier)
            return [identifier]
        leaves: list[str] = []
        for step in sequence.identifiers():
            leaves.extend(self.expand(step, stack + [identifier]))
        return leaves

    def missing(self, identifier: str) -> list[str]:
        """Identifiers reachable from `identifier` that are not registered."""
        out: list[str] = []
        seen: set[str] = set()
        pending = [identifier]
        while pending:
            name = pending.pop(0)
            if name in seen:
                continue
            seen.add(name)
            if name not in self.specs:
                out.append(name)
                continue
            sequence = self.sequences.get(name)
            if sequence is not None:
                pending.extend(sequence.identifiers())
        return out


class Orchestrator:
    def __init__(self, registry: Registry, name: str = "orchestrator"):
        self.name = name
        self.registry = registry
        self.logger = get_logger(f"orchestrator.{self.name}")

    def run(self, sequence: Sequence, params: Optional[dict] = None) -> None:
        # Steps run one at a time; any failure propagates and ends the run.
        params = {} if params is None else params
        selected = sequence.identifiers()
        self.logger.info("Selected steps: %s", " → ".join(selected))
        for identifier in selected:
            fn = self.registry.resolve(identifier)
            step_logger = get_logger(f"orchestrator.{self.name}.{identifier}")
            step_logger.info("Run: %s", identifier)
            fn(params=params)


def build_registry(
    specs: Iterable[GeneratorSpec], sequences: Iterable[Sequence] = ()
) -> Registry:
    registry = Registry()
    for spec in specs:
        registry.register(spec)
    for sequence in sequences:
        registry.register_sequence(sequence)
    return registry
