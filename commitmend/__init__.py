"""AI-assisted conventional commit authoring with lint-driven repair."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commitmend")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
