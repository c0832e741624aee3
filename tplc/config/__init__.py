from .load import CONFIG_FILE, find_config, load_config
from .model import DEFAULT_CONFIG, DEFAULT_DELIMITERS, CompilerConfig, Delimiters

__all__ = [
    "CONFIG_FILE",
    "CompilerConfig",
    "Delimiters",
    "DEFAULT_CONFIG",
    "DEFAULT_DELIMITERS",
    "find_config",
    "load_config",
]
