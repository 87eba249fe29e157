"""Top-level package for the emissions-insight project.

This package simply exposes the public run() helper so callers can do
`python -m emissions_insight` or `from emissions_insight import run; run()`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("emissions-insight")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .workflows.dashboard_pipeline import run  # convenience re-export

__all__ = ["run", "__version__"]
