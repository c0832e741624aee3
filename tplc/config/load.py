from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import CompilerConfig, DEFAULT_CONFIG
from ..errors import ConfigError

CONFIG_FILE = "tplc.yaml"

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns a mapping (empty if the file is absent)."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Union[str, Path]) -> CompilerConfig:
    """
    Loads compiler configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed configuration, or defaults if the file does not exist

    Raises:
        ConfigError: If the file is not a mapping or holds invalid values
    """
    p = Path(path)
    raw = _read_yaml_map(p)
    if not raw:
        return DEFAULT_CONFIG
    try:
        return CompilerConfig.from_dict(raw)
    except ConfigError as e:
        raise ConfigError(f"{p}: {e}") from e


def find_config(start: Union[str, Path]) -> Optional[Path]:
    """Returns `tplc.yaml` in the given directory if it exists."""
    candidate = Path(start) / CONFIG_FILE
    return candidate if candidate.is_file() else None


__all__ = ["CONFIG_FILE", "load_config", "find_config"]
