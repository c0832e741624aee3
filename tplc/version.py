from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Single way to get the installed package version.
    Does not depend on other modules (to avoid import cycles).
    """
    try:
        return metadata.version("tplc")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
