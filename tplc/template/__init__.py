"""
Template front-end: lexer, tag dispatch and tree builder.
"""

from __future__ import annotations

from .builder import TreeBuilder
from .fragments import Fragment, FragmentKind, classify_fragment
from .lexer import TemplateLexer, tokenize
from .nodes import (
    Node, Root, TextNode, VariableNode, IfNode, ElseNode, ForNode,
    IncludeNode, BlockNode, ExtendsNode, CacheNode, format_tree,
)
from .registry import TagRegistry, TagRule, default_tag_registry, default_tag_rules

__all__ = [
    "TreeBuilder",
    "Fragment",
    "FragmentKind",
    "classify_fragment",
    "TemplateLexer",
    "tokenize",
    "Node",
    "Root",
    "TextNode",
    "VariableNode",
    "IfNode",
    "ElseNode",
    "ForNode",
    "IncludeNode",
    "BlockNode",
    "ExtendsNode",
    "CacheNode",
    "format_tree",
    "TagRegistry",
    "TagRule",
    "default_tag_registry",
    "default_tag_rules",
]
