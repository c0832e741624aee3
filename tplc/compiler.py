"""
Compile entry point: document source -> validated node tree.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .config.model import CompilerConfig, DEFAULT_CONFIG
from .io import Reader, StringReader
from .paths import PathRegistry
from .template.builder import TreeBuilder
from .template.fragments import Fragment
from .template.lexer import TemplateLexer
from .template.nodes import Root
from .template.registry import TagRegistry, default_tag_registry

logger = logging.getLogger(__name__)


class Compiler:
    """
    Template compiler bound to one configuration.

    Holds no per-document state, so a single instance can compile
    several documents, also from different threads.
    """

    def __init__(self, config: Optional[CompilerConfig] = None, registry: Optional[TagRegistry] = None):
        self.config = config or DEFAULT_CONFIG
        self.registry = registry or default_tag_registry()
        self.lexer = TemplateLexer(self.config.delimiters)
        self.search_paths: PathRegistry = self.config.path_registry()

    def tokenize(self, text: str) -> List[Fragment]:
        return self.lexer.tokenize(text)

    def compile(self, reader: Reader) -> Root:
        """
        Compiles one document.

        Args:
            reader: Source of the document text and its identifier

        Returns:
            Root of the document tree

        Raises:
            TemplateSyntaxError: On unknown tags
            StructuralNestingError: On broken nesting
        """
        source_id = reader.id()
        logger.debug(f"Compiling '{source_id}'")
        fragments = self.tokenize(reader.read_all())
        builder = TreeBuilder(self.registry, strict=self.config.strict_close_tags)
        return builder.build(fragments, source_id)

    def compile_string(self, text: str, source_id: str = "<string>") -> Root:
        return self.compile(StringReader(text, source_id))


def compile_template(reader: Reader, config: Optional[CompilerConfig] = None) -> Root:
    """Compiles a document with a one-off compiler."""
    return Compiler(config).compile(reader)


def compile_string(text: str, source_id: str = "<string>", config: Optional[CompilerConfig] = None) -> Root:
    """Compiles template text held in memory."""
    return Compiler(config).compile_string(text, source_id)


__all__ = ["Compiler", "compile_template", "compile_string"]
