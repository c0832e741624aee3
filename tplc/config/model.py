"""
Compiler configuration models.

Plain dataclasses built from the YAML mapping via `from_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ..errors import ConfigError
from ..paths import PathRegistry


@dataclass(frozen=True)
class Delimiters:
    """Literal markers surrounding comments, variables and block tags."""
    comment_start: str = "{#"
    comment_end: str = "#}"
    var_start: str = "{{"
    var_end: str = "}}"
    block_start: str = "{%"
    block_end: str = "%}"

    def __post_init__(self):
        for name, value in self.__dict__.items():
            if not isinstance(value, str) or not value:
                raise ConfigError(f"Delimiter '{name}' must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Delimiters":
        """
        Creates delimiters from a mapping of pairs:

            comment: ["{#", "#}"]
            variable: ["{{", "}}"]
            block: ["{%", "%}"]

        Missing pairs keep their defaults.
        """
        defaults = cls()
        kwargs: Dict[str, str] = {}
        for key, (start_attr, end_attr) in _PAIRS.items():
            if key not in data:
                continue
            pair = data[key]
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise ConfigError(f"delimiters.{key}: expected a pair [start, end], got {pair!r}")
            kwargs[start_attr], kwargs[end_attr] = str(pair[0]), str(pair[1])
        unknown = set(data) - set(_PAIRS)
        if unknown:
            raise ConfigError(f"delimiters: unknown keys {sorted(unknown)}")
        return cls(**{**defaults.__dict__, **kwargs})

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            key: [getattr(self, start_attr), getattr(self, end_attr)]
            for key, (start_attr, end_attr) in _PAIRS.items()
        }


_PAIRS = {
    "comment": ("comment_start", "comment_end"),
    "variable": ("var_start", "var_end"),
    "block": ("block_start", "block_end"),
}

DEFAULT_DELIMITERS = Delimiters()


@dataclass(frozen=True)
class CompilerConfig:
    """
    Settings for one compiler instance.

    Immutable after construction, so one config can be shared by
    compilers running in different threads.
    """
    delimiters: Delimiters = DEFAULT_DELIMITERS
    # Validate close tags against the tag they close
    strict_close_tags: bool = False
    paths: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "paths", tuple(self.paths))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompilerConfig":
        """Creates a config from a mapping (from YAML)."""
        delims_raw = data.get("delimiters") or {}
        if not isinstance(delims_raw, dict):
            raise ConfigError("delimiters: expected a mapping")

        strict = data.get("strict_close_tags", False)
        if not isinstance(strict, bool):
            raise ConfigError(f"strict_close_tags: expected a boolean, got {strict!r}")

        paths_raw = data.get("paths") or []
        if isinstance(paths_raw, str):
            paths_raw = [paths_raw]
        if not isinstance(paths_raw, list) or not all(isinstance(p, str) and p for p in paths_raw):
            raise ConfigError("paths: expected a list of non-empty strings")

        return cls(
            delimiters=Delimiters.from_dict(delims_raw),
            strict_close_tags=strict,
            paths=tuple(paths_raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delimiters": self.delimiters.to_dict(),
            "strict_close_tags": self.strict_close_tags,
            "paths": list(self.paths),
        }

    def path_registry(self) -> PathRegistry:
        """Fresh path registry: the default entry followed by the configured paths."""
        return PathRegistry(self.paths)


DEFAULT_CONFIG = CompilerConfig()


__all__ = ["Delimiters", "DEFAULT_DELIMITERS", "CompilerConfig", "DEFAULT_CONFIG"]
