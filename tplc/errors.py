"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TplUserError.

Programming errors and bugs should NOT inherit from TplUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .template.nodes import Node


class TplUserError(Exception):
    """
    Base class for all user-facing errors in tplc.

    These errors indicate problems that the user can fix:
    broken template markup, unknown tags, invalid configuration, etc.
    """
    pass


class TemplateSyntaxError(TplUserError):
    """Open tag whose content is not recognized by any tag rule."""

    def __init__(self, tag_text: str, message: Optional[str] = None):
        super().__init__(message or f"Unknown tag: '{tag_text}'")
        self.tag_text = tag_text


class StructuralNestingError(TplUserError):
    """
    Broken tag nesting: unclosed scope or close tag without an open scope.

    `node` is the offending still-open node when one is known.
    """

    def __init__(self, message: str, node: Optional["Node"] = None):
        super().__init__(message)
        self.node = node


class ClosingTagMismatchError(StructuralNestingError):
    """Close tag does not correspond to the innermost open tag (strict mode only)."""

    def __init__(self, node: "Node", closing_text: str):
        super().__init__(
            f"Tag '{closing_text}' cannot close '{node.name}'"
            f" (expected 'end' or 'end{node.name}')",
            node,
        )
        self.closing_text = closing_text


class ConfigError(TplUserError):
    """Invalid compiler configuration."""
    pass


__all__ = [
    "TplUserError",
    "TemplateSyntaxError",
    "StructuralNestingError",
    "ClosingTagMismatchError",
    "ConfigError",
]
