"""
LinkHarvester package initializer.
Defines package version and exposes the CLI entry point as ``main_cli``.
"""
__version__ = "0.1.0"

# bound under a different name so ``link_harvester.cli`` stays the module
from link_harvester.cli import cli as main_cli  # noqa: E402

__all__ = ["main_cli", "__version__"]
