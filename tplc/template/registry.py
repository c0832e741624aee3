"""
Tag dispatch table.

Maps the content of an opening block tag to the node kind it creates.
Rules are checked in registration order and the first matching rule wins,
so a more specific rule must be registered before a more general one.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from re import Pattern
from typing import Callable, Iterable, List, Optional

from .fragments import Fragment
from .nodes import (
    Node, IfNode, ElseNode, ForNode, IncludeNode, BlockNode, ExtendsNode, CacheNode
)
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)

NodeFactory = Callable[[], Node]


@dataclass(frozen=True)
class TagRule:
    """
    Dispatch rule for an opening tag.
    """
    name: str                    # Rule name (usually the tag keyword)
    pattern: Pattern[str]        # Searched in the cleaned tag content
    factory: NodeFactory         # Creates an empty node of the matching kind

    def matches(self, tag_text: str) -> bool:
        return self.pattern.search(tag_text) is not None


class TagRegistry:
    """
    Ordered collection of tag rules.

    Treat as read-only once compilation starts: a registry may be shared
    between compilers.
    """

    def __init__(self, rules: Optional[Iterable[TagRule]] = None):
        self._rules: List[TagRule] = []
        for rule in rules or ():
            self.register(rule)

    def register(self, rule: TagRule, before: Optional[str] = None) -> None:
        """
        Adds a rule.

        Args:
            rule: Rule to add
            before: Name of an existing rule to insert in front of
                    (by default the rule goes to the end of the table)

        Raises:
            ValueError: If a rule with this name exists or `before` is unknown
        """
        if any(r.name == rule.name for r in self._rules):
            raise ValueError(f"Tag rule '{rule.name}' already registered")

        if before is None:
            self._rules.append(rule)
            return

        for i, existing in enumerate(self._rules):
            if existing.name == before:
                self._rules.insert(i, rule)
                return
        raise ValueError(f"Tag rule '{before}' not found")

    @property
    def rules(self) -> List[TagRule]:
        return list(self._rules)

    def resolve(self, fragment: Fragment) -> NodeFactory:
        """
        Finds the node factory for an opening tag.

        Raises:
            TemplateSyntaxError: If no rule matches the tag content
        """
        for rule in self._rules:
            if rule.matches(fragment.clean):
                logger.debug(f"Tag '{fragment.clean}' matched rule '{rule.name}'")
                return rule.factory
        raise TemplateSyntaxError(fragment.clean)

    def create(self, fragment: Fragment) -> Node:
        """Creates an (unprocessed) node for an opening tag."""
        return self.resolve(fragment)()


def default_tag_rules() -> List[TagRule]:
    """Built-in tags, in dispatch order."""
    return [
        TagRule("if", re.compile(r'^if\s+.*$'), IfNode),
        TagRule("else", re.compile(r'^else$'), ElseNode),
        TagRule("for", re.compile(r'^for\s+\w[a-zA-Z0-9 _,]*\s+in\s+.+$'), ForNode),
        TagRule("include", re.compile(r'^include\s+.+$'), IncludeNode),
        TagRule("block", re.compile(r'^block\s+\w+$'), BlockNode),
        TagRule("extends", re.compile(r'^extends\s+.+$'), ExtendsNode),
        TagRule("cache", re.compile(r'^cache\s+\d+\s+.+'), CacheNode),
    ]


_default_registry: Optional[TagRegistry] = None


def default_tag_registry() -> TagRegistry:
    """Registry with the built-in tags (shared instance)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TagRegistry(default_tag_rules())
    return _default_registry


__all__ = [
    "NodeFactory",
    "TagRule",
    "TagRegistry",
    "default_tag_rules",
    "default_tag_registry",
]
