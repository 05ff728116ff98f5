"""Quilt toolchain generators.

Rails setup must run before the React steps: the React generators write into
the directories and config the Rails step creates.
"""

from ..orchestrator import Sequence, generator
from .rails import generate


QUILT_INSTALL = Sequence(
    name="quilt_rails:quilt_install",
    namespace="quilt_rails:quilt",
    steps=("rails_setup", "react_setup", "react_app"),
    description="Install quilt: Rails setup, React setup, then the React app",
)


@generator(name="quilt_rails:quilt:rails_setup")
def rails_setup(params: dict):
    """Mount quilt_rails routes and add the server-side rendering config."""
    generate("quilt_rails:quilt:rails_setup", params)


@generator(name="quilt_rails:quilt:react_setup")
def react_setup(params: dict):
    """Add the React and quilt JavaScript dependencies."""
    generate("quilt_rails:quilt:react_setup", params)


@generator(name="quilt_rails:quilt:react_app")
def react_app(params: dict):
    """Generate the starter React application under app/ui."""
    generate("quilt_rails:quilt:react_app", params)
