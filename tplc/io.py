"""
Template sources.

A reader gives the compiler the whole document text and an identifier
that ends up on the Root node (used in diagnostics and as a cache key).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class Reader(Protocol):
    """Source of one template document."""

    def read_all(self) -> str:
        ...

    def id(self) -> str:
        ...


class StringReader:
    """In-memory template source."""

    def __init__(self, text: str, source_id: str = "<string>"):
        self._text = text
        self._source_id = source_id

    def read_all(self) -> str:
        return self._text

    def id(self) -> str:
        return self._source_id


class FileReader:
    """
    Template file on disk (UTF-8).

    The identifier is the path as given, in POSIX form.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def read_all(self) -> str:
        return self.path.read_text(encoding=self.encoding)

    def id(self) -> str:
        return self.path.as_posix()


__all__ = ["Reader", "StringReader", "FileReader"]
