"""
Template tree nodes.

Every node owns its children. Scope nodes (`creates_scope = True`) stay
open on the builder's stack until their closing tag arrives; leaves are
always terminal.

The nodes only capture what their tag says (condition, loop targets,
include target, ...). Rendering them is not the compiler's business.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional

from .fragments import Fragment
from ..errors import StructuralNestingError, TemplateSyntaxError


class Node:
    """Base class for all template nodes."""

    name: str = "node"
    creates_scope: bool = False

    def __init__(self):
        self.children: List[Node] = []
        # Cleaned text of the tag that produced the node
        self.tag: Optional[str] = None
        # Cleaned text of the closing tag, for scope nodes
        self.closing_tag: Optional[str] = None

    # ---- lifecycle hooks called by the tree builder ----

    def process_fragment(self, fragment: Fragment) -> None:
        """Absorbs the tag content. Called once, right after construction."""
        self.tag = fragment.clean

    def enter_scope(self) -> None:
        """Called once after the node has been linked and pushed on the scope stack."""
        pass

    def exit_scope(self, closing_text: str) -> None:
        """Called once when the closing tag of the scope is met."""
        self.closing_tag = closing_text

    def accepts_close(self, closing_text: str) -> bool:
        """
        Checks whether a closing tag names this node.

        Accepts `end` and `end<name>`. Used only in strict mode.
        """
        keyword = closing_text.split(None, 1)[0] if closing_text else ""
        return keyword in ("end", f"end{self.name}")

    # ---- tree structure ----

    def add_child(self, node: Node) -> None:
        self.children.append(node)

    def walk(self) -> Iterator[Node]:
        """Depth-first, pre-order traversal of the subtree (self included)."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def attributes(self) -> Dict[str, Any]:
        """Parsed tag data, for dumps and debugging."""
        return {}

    def describe(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.attributes().items())
        return f"{type(self).__name__}({attrs})"

    def __repr__(self) -> str:
        return self.describe()


class LeafNode(Node):
    """Node that never has children."""

    def add_child(self, node: Node) -> None:
        raise StructuralNestingError(f"'{self.name}' node cannot contain other nodes", self)


def _parse_tag(pattern: re.Pattern, fragment: Fragment) -> re.Match:
    m = pattern.match(fragment.clean)
    if m is None:
        raise TemplateSyntaxError(fragment.clean)
    return m


class Root(Node):
    """Top-level node of one compiled document."""

    name = "root"
    creates_scope = True

    def __init__(self, source_id: str):
        super().__init__()
        self.source_id = source_id

    def attributes(self) -> Dict[str, Any]:
        return {"source_id": self.source_id}


class TextNode(LeafNode):
    """Static text, output as is."""

    name = "text"

    def __init__(self):
        super().__init__()
        self.text = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        self.text = fragment.raw

    def attributes(self) -> Dict[str, Any]:
        return {"text": self.text}


class VariableNode(LeafNode):
    """Interpolated expression {{ expr }}."""

    name = "variable"

    def __init__(self):
        super().__init__()
        self.expression = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        self.expression = fragment.clean

    def attributes(self) -> Dict[str, Any]:
        return {"expression": self.expression}


class IfNode(Node):
    """
    Conditional block {% if condition %}...{% endif %}.

    Once an `else` tag has been added, the following children belong
    to the else branch.
    """

    name = "if"
    creates_scope = True
    _PATTERN = re.compile(r'^if\s+(?P<condition>.+)$', re.DOTALL)

    def __init__(self):
        super().__init__()
        self.condition = ""
        self.else_branch: Optional[ElseNode] = None

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        self.condition = _parse_tag(self._PATTERN, fragment).group("condition").strip()

    def add_child(self, node: Node) -> None:
        if isinstance(node, ElseNode):
            if self.else_branch is not None:
                raise TemplateSyntaxError(node.tag or "else", f"Duplicate 'else' in '{self.tag}'")
            self.else_branch = node
            self.children.append(node)
        elif self.else_branch is not None:
            self.else_branch.add_child(node)
        else:
            self.children.append(node)

    @property
    def body(self) -> List[Node]:
        """Children of the true branch."""
        return [child for child in self.children if child is not self.else_branch]

    def attributes(self) -> Dict[str, Any]:
        return {"condition": self.condition}


class ElseNode(Node):
    """Alternative branch {% else %}, holds the nodes up to the closing tag."""

    name = "else"


class ForNode(Node):
    """Loop {% for a, b in expr %}...{% endfor %}."""

    name = "for"
    creates_scope = True
    _PATTERN = re.compile(r'^for\s+(?P<targets>.+?)\s+in\s+(?P<iterable>.+)$', re.DOTALL)
    _IDENT = re.compile(r'^\w+$')

    def __init__(self):
        super().__init__()
        self.targets: List[str] = []
        self.iterable = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        m = _parse_tag(self._PATTERN, fragment)
        targets = [t.strip() for t in m.group("targets").split(",") if t.strip()]
        if not targets or not all(self._IDENT.match(t) for t in targets):
            raise TemplateSyntaxError(fragment.clean, f"Invalid loop variables in '{fragment.clean}'")
        self.targets = targets
        self.iterable = m.group("iterable").strip()

    def attributes(self) -> Dict[str, Any]:
        return {"targets": list(self.targets), "iterable": self.iterable}


class IncludeNode(LeafNode):
    """Textual inclusion {% include expr %}."""

    name = "include"
    _PATTERN = re.compile(r'^include\s+(?P<target>.+)$', re.DOTALL)

    def __init__(self):
        super().__init__()
        self.target = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        self.target = _parse_tag(self._PATTERN, fragment).group("target").strip()

    def attributes(self) -> Dict[str, Any]:
        return {"target": self.target}


class BlockNode(Node):
    """Named overridable block {% block name %}...{% endblock %}."""

    name = "block"
    creates_scope = True
    _PATTERN = re.compile(r'^block\s+(?P<name>\w+)$')

    def __init__(self):
        super().__init__()
        self.block_name = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        self.block_name = _parse_tag(self._PATTERN, fragment).group("name")

    def accepts_close(self, closing_text: str) -> bool:
        # {% endblock %} or {% endblock <same name> %}
        if not super().accepts_close(closing_text):
            return False
        parts = closing_text.split()
        return len(parts) == 1 or parts[1:] == [self.block_name]

    def attributes(self) -> Dict[str, Any]:
        return {"block_name": self.block_name}


class ExtendsNode(LeafNode):
    """Inheritance declaration {% extends expr %}."""

    name = "extends"
    _PATTERN = re.compile(r'^extends\s+(?P<target>.+)$', re.DOTALL)

    def __init__(self):
        super().__init__()
        self.target = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        self.target = _parse_tag(self._PATTERN, fragment).group("target").strip()

    def attributes(self) -> Dict[str, Any]:
        return {"target": self.target}


class CacheNode(Node):
    """Cached region {% cache seconds key %}...{% endcache %}."""

    name = "cache"
    creates_scope = True
    _PATTERN = re.compile(r'^cache\s+(?P<ttl>\d+)\s+(?P<key>.+)$', re.DOTALL)

    def __init__(self):
        super().__init__()
        self.ttl = 0
        self.key = ""

    def process_fragment(self, fragment: Fragment) -> None:
        super().process_fragment(fragment)
        m = _parse_tag(self._PATTERN, fragment)
        self.ttl = int(m.group("ttl"))
        self.key = m.group("key").strip()

    def attributes(self) -> Dict[str, Any]:
        return {"ttl": self.ttl, "key": self.key}


def format_tree(node: Node, indent: int = 0) -> str:
    """Formats a subtree as an indented listing for debugging."""
    lines: List[str] = []
    stack = [(node, indent)]
    while stack:
        current, depth = stack.pop()
        prefix = "  " * depth
        if isinstance(current, TextNode):
            # Only the start of long text, for readability
            preview = current.text[:50] + "..." if len(current.text) > 50 else current.text
            lines.append(f"{prefix}TextNode({preview!r})")
        else:
            lines.append(f"{prefix}{current.describe()}")
        stack.extend((child, depth + 1) for child in reversed(current.children))
    return "\n".join(lines)


__all__ = [
    "Node",
    "LeafNode",
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
]
