"""
Search paths for include/extends resolution.

The compiler itself never consults these paths: they are configuration
for whoever resolves `include` and `extends` targets later.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

# Current working location, always the first search path
DEFAULT_PATH = "./"


def normalize_path(path: str) -> str:
    """Converts separators to '/' and guarantees a trailing '/'."""
    path = path.replace("\\", "/")
    if not path.endswith("/"):
        path += "/"
    return path


class PathRegistry:
    """
    Ordered list of template directories.

    Append-only: paths are added at configuration time and only read afterwards.
    """

    def __init__(self, paths: Optional[Iterable[str]] = None):
        self._paths = [DEFAULT_PATH]
        for p in paths or ():
            self.add_path(p)

    def add_path(self, path: str) -> None:
        if not path:
            raise ValueError("Search path must not be empty")
        self._paths.append(normalize_path(path))

    def paths(self) -> Tuple[str, ...]:
        return tuple(self._paths)

    def __iter__(self):
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)


# Process-wide registry. Configure it once at startup, before compiling concurrently.
_default_registry = PathRegistry()


def get_path_registry() -> PathRegistry:
    """Returns the process-wide path registry."""
    return _default_registry


def add_path(path: str) -> None:
    _default_registry.add_path(path)


def paths() -> Tuple[str, ...]:
    return _default_registry.paths()


__all__ = [
    "DEFAULT_PATH",
    "normalize_path",
    "PathRegistry",
    "get_path_registry",
    "add_path",
    "paths",
]
