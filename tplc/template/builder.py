"""
Tree construction from fragments.

Keeps a stack of open scope nodes: new nodes are linked to the node on
top of the stack, closing tags pop it.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .fragments import Fragment, FragmentKind
from .nodes import Node, Root, TextNode, VariableNode
from .registry import TagRegistry, default_tag_registry
from ..errors import ClosingTagMismatchError, StructuralNestingError, TemplateSyntaxError

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds and validates the node tree of one document.

    In permissive mode (default) any closing tag closes the innermost open
    scope, whatever its keyword. In strict mode the keyword must be `end` or
    `end<name>` of the scope being closed.
    """

    def __init__(self, registry: Optional[TagRegistry] = None, strict: bool = False):
        self.registry = registry or default_tag_registry()
        self.strict = strict

    def build(self, fragments: List[Fragment], source_id: str) -> Root:
        """
        Links fragments into a tree rooted at a new Root node.

        Args:
            fragments: Fragments in source order
            source_id: Document identifier stored on the Root

        Returns:
            Root of the complete tree

        Raises:
            StructuralNestingError: On unclosed scopes or unexpected closing tags
            ClosingTagMismatchError: In strict mode, when a closing tag names another scope
            TemplateSyntaxError: On unknown tags
        """
        root = Root(source_id)
        scope_stack: List[Node] = [root]

        for fragment in fragments:
            if not scope_stack:
                raise StructuralNestingError("nesting issues")

            parent = scope_stack[-1]

            if fragment.kind is FragmentKind.CLOSE_BLOCK:
                if parent is root:
                    # Closing tag without an open scope
                    raise StructuralNestingError("nesting issues")
                if self.strict and not parent.accepts_close(fragment.clean):
                    raise ClosingTagMismatchError(parent, fragment.clean)
                parent.exit_scope(fragment.clean)
                scope_stack.pop()
                continue

            node = self._create_node(fragment)
            parent.add_child(node)
            if node.creates_scope:
                scope_stack.append(node)
                node.enter_scope()

        if len(scope_stack) > 1:
            unclosed = scope_stack[-1]
            raise StructuralNestingError(
                f"There is non-closed tag {unclosed.name} ('{unclosed.tag}')", unclosed
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Built tree for '{source_id}' with {sum(1 for _ in root.walk()) - 1} nodes")
        return root

    def _create_node(self, fragment: Fragment) -> Node:
        """Creates a node for a fragment and lets it absorb the fragment."""
        if fragment.kind is FragmentKind.TEXT:
            node: Node = TextNode()
        elif fragment.kind is FragmentKind.VARIABLE:
            node = VariableNode()
        elif fragment.kind is FragmentKind.OPEN_BLOCK:
            node = self.registry.create(fragment)
        else:
            raise TemplateSyntaxError(fragment.clean)
        node.process_fragment(fragment)
        return node


__all__ = ["TreeBuilder"]
