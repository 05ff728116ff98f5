"""Top-level quilt_rails install sequence."""

from ..orchestrator import Sequence


INSTALL = Sequence(
    name="quilt_rails:install",
    namespace="quilt_rails",
    steps=("sewing_kit:install", "quilt_install"),
    description="Install sewing-kit, then quilt",
)
