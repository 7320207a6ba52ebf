"""AI-powered Conventional Commits message generator."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commitment")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
