"""
Fragments: classified slices of template source.

Each slice produced by the lexer is either plain text or a complete tag
(variable or block, delimiters included).
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from ..config.model import Delimiters, DEFAULT_DELIMITERS


class FragmentKind(enum.Enum):
    """Kinds of template fragments."""
    TEXT = "TEXT"
    VARIABLE = "VARIABLE"
    OPEN_BLOCK = "OPEN_BLOCK"
    CLOSE_BLOCK = "CLOSE_BLOCK"


# Reserved prefix of closing tags: end, endif, endfor, endblock name, ...
CLOSE_TAG_PATTERN = re.compile(r'^end\w*(?:\s|$)')


@dataclass(frozen=True)
class Fragment:
    """
    One slice of the template.

    `raw` is the exact slice (delimiters included), `clean` is the tag content
    without delimiters and surrounding whitespace. Text fragments keep
    their text untouched in `clean`.
    """
    raw: str
    kind: FragmentKind
    clean: str

    @property
    def is_tag(self) -> bool:
        return self.kind is not FragmentKind.TEXT

    def __repr__(self) -> str:
        return f"Fragment({self.kind.name}, {self.clean!r})"


def _unwrap(raw: str, start: str, end: str) -> str | None:
    """Tag content if `raw` is wrapped by the delimiter pair, otherwise None."""
    if len(raw) >= len(start) + len(end) and raw.startswith(start) and raw.endswith(end):
        return raw[len(start):len(raw) - len(end)]
    return None


def classify_fragment(raw: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> Fragment:
    """
    Determines the kind of a slice from its delimiters.

    Block tags whose trimmed content starts with the `end` keyword are
    closing tags, all other block tags are opening ones.
    """
    content = _unwrap(raw, delimiters.var_start, delimiters.var_end)
    if content is not None:
        return Fragment(raw, FragmentKind.VARIABLE, content.strip())

    content = _unwrap(raw, delimiters.block_start, delimiters.block_end)
    if content is not None:
        clean = content.strip()
        kind = FragmentKind.CLOSE_BLOCK if CLOSE_TAG_PATTERN.match(clean) else FragmentKind.OPEN_BLOCK
        return Fragment(raw, kind, clean)

    return Fragment(raw, FragmentKind.TEXT, raw)


__all__ = ["FragmentKind", "Fragment", "CLOSE_TAG_PATTERN", "classify_fragment"]
