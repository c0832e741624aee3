"""
Lexical analysis of template documents.

Removes comments and splits the rest of the document into text slices
and complete tags, preserving their original order.
"""

from __future__ import annotations

import logging
import re
from typing import List

from .fragments import Fragment, FragmentKind, classify_fragment
from ..config.model import Delimiters, DEFAULT_DELIMITERS

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Regex-based template splitter.

    Recognizes:
    - comments {# ... #} (removed, may span several lines)
    - variables {{ ... }}
    - block tags {% ... %}

    Delimiters are matched non-greedily. Comments are matched across line
    breaks, variable and block tags are not: a tag broken over several lines
    is plain text. Unterminated delimiters never match and stay in the text as is.
    """

    def __init__(self, delimiters: Delimiters = DEFAULT_DELIMITERS):
        self.delimiters = delimiters
        self._comment_re = re.compile(
            re.escape(delimiters.comment_start) + r'.*?' + re.escape(delimiters.comment_end),
            re.DOTALL,
        )
        # Single capturing group: re.split keeps the matched tags between the text pieces
        self._split_re = re.compile(
            '('
            + re.escape(delimiters.var_start) + r'.*?' + re.escape(delimiters.var_end)
            + '|'
            + re.escape(delimiters.block_start) + r'.*?' + re.escape(delimiters.block_end)
            + ')'
        )

    def strip_comments(self, text: str) -> str:
        """Removes all comments. Comments do not nest: the first end marker closes."""
        return self._comment_re.sub("", text)

    def tokenize(self, text: str) -> List[Fragment]:
        """
        Converts a template document into classified fragments.

        Args:
            text: Full document text

        Returns:
            Ordered list of fragments
        """
        fragments: List[Fragment] = []
        # re.split puts the matched tags at odd indices, unmatched text at even ones
        for i, piece in enumerate(self._split_re.split(self.strip_comments(text))):
            if not piece:
                continue
            if i % 2:
                fragments.append(classify_fragment(piece, self.delimiters))
            else:
                fragments.append(Fragment(piece, FragmentKind.TEXT, piece))
        logger.debug(f"Tokenized {len(text)} chars into {len(fragments)} fragments")
        return fragments


def tokenize(text: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> List[Fragment]:
    """
    Convenience function for one-off tokenization.

    Args:
        text: Template text
        delimiters: Delimiter set (defaults to {# #}, {{ }}, {% %})

    Returns:
        List of fragments
    """
    return TemplateLexer(delimiters).tokenize(text)


__all__ = ["TemplateLexer", "tokenize"]
