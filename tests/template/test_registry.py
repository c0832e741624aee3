"""Tests for the tag dispatch table."""

import re

import pytest

from tplc.errors import TemplateSyntaxError
from tplc.template.fragments import classify_fragment
from tplc.template.nodes import (
    Node, IfNode, ElseNode, ForNode, IncludeNode, BlockNode, ExtendsNode, CacheNode
)
from tplc.template.registry import TagRegistry, TagRule, default_tag_rules


def frag(tag: str):
    return classify_fragment("{% " + tag + " %}")


@pytest.fixture
def registry() -> TagRegistry:
    return TagRegistry(default_tag_rules())


class TestDefaultRules:

    @pytest.mark.parametrize("tag,expected", [
        ("if x > 0", IfNode),
        ("if not user", IfNode),
        ("else", ElseNode),
        ("for item in items", ForNode),
        ("for key, value in data.items()", ForNode),
        ("include header.tpl", IncludeNode),
        ("include 'partials/nav.tpl'", IncludeNode),
        ("block content", BlockNode),
        ("extends base.tpl", ExtendsNode),
        ("cache 60 user.id", CacheNode),
    ])
    def test_resolve(self, registry, tag, expected):
        assert registry.resolve(frag(tag)) is expected

    @pytest.mark.parametrize("tag", [
        "unknown tag",
        "if",
        "else if x",
        "for in items",
        "block two words",
        "cache soon key",
        "include",
        "elif x",
    ])
    def test_unknown_tag(self, registry, tag):
        with pytest.raises(TemplateSyntaxError) as excinfo:
            registry.resolve(frag(tag))
        assert excinfo.value.tag_text == tag
        assert tag in str(excinfo.value)

    def test_rule_order(self, registry):
        assert [r.name for r in registry.rules] == [
            "if", "else", "for", "include", "block", "extends", "cache",
        ]

    def test_create_returns_fresh_nodes(self, registry):
        a = registry.create(frag("if x"))
        b = registry.create(frag("if x"))
        assert isinstance(a, IfNode)
        assert a is not b


class CustomNode(Node):
    name = "custom"


class TestRegistration:

    def test_register_appends(self, registry):
        registry.register(TagRule("custom", re.compile(r'^custom\b'), CustomNode))
        assert registry.rules[-1].name == "custom"
        assert registry.resolve(frag("custom thing")) is CustomNode

    def test_first_match_wins(self, registry):
        # Overlaps with "include": only order decides
        registry.register(
            TagRule("include_raw", re.compile(r'^include\s+raw\s+'), CustomNode),
            before="include",
        )
        assert registry.resolve(frag("include raw file.txt")) is CustomNode
        assert registry.resolve(frag("include file.txt")) is IncludeNode

    def test_later_overlapping_rule_is_shadowed(self, registry):
        registry.register(TagRule("include_raw", re.compile(r'^include\s+raw\s+'), CustomNode))
        assert registry.resolve(frag("include raw file.txt")) is IncludeNode

    def test_duplicate_name_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register(TagRule("if", re.compile(r'^if'), IfNode))

    def test_unknown_before_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register(TagRule("x", re.compile(r'^x'), CustomNode), before="missing")

    def test_empty_registry_rejects_everything(self):
        with pytest.raises(TemplateSyntaxError):
            TagRegistry().resolve(frag("if x"))
