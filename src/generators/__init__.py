"""Generator modules live here.

Leaf generators are functions decorated with `@orchestrator.generator(name=...)`;
install sequences are module-level `Sequence` objects. Both are collected by
`orchestrator.cli.discover_generators`.
"""
