"""
Core package for the economics teaching assistant.

Kept free of heavy imports so the CLI and tests can import it before the
model runtime is configured.
"""

from importlib import metadata


def get_version() -> str:
    """Return the installed project version."""
    try:
        return metadata.version("econ-ta")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
