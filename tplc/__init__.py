"""
tplc: compiles template documents into validated node trees.
"""

from __future__ import annotations

from .compiler import Compiler, compile_string, compile_template
from .config import CompilerConfig, Delimiters, load_config
from .errors import (
    ClosingTagMismatchError, ConfigError, StructuralNestingError, TemplateSyntaxError, TplUserError
)
from .io import FileReader, Reader, StringReader
from .paths import PathRegistry, add_path, get_path_registry

__all__ = [
    "Compiler",
    "compile_string",
    "compile_template",
    "CompilerConfig",
    "Delimiters",
    "load_config",
    "TplUserError",
    "TemplateSyntaxError",
    "StructuralNestingError",
    "ClosingTagMismatchError",
    "ConfigError",
    "Reader",
    "StringReader",
    "FileReader",
    "PathRegistry",
    "add_path",
    "get_path_registry",
]
