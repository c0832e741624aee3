"""
JSON report models for the CLI.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .template.fragments import Fragment
from .template.nodes import Node


class FragmentInfo(BaseModel):
    kind: str
    raw: str
    clean: str

    @classmethod
    def from_fragment(cls, fragment: Fragment) -> "FragmentInfo":
        return cls(kind=fragment.kind.value, raw=fragment.raw, clean=fragment.clean)


class NodeInfo(BaseModel):
    name: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    children: List["NodeInfo"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: Node) -> "NodeInfo":
        # Children before parents: reversed pre-order, no recursion on deep trees
        built: Dict[int, NodeInfo] = {}
        for current in reversed(list(node.walk())):
            built[id(current)] = cls.model_construct(
                name=current.name,
                attributes=current.attributes(),
                children=[built[id(child)] for child in current.children],
            )
        return built[id(node)]


class TreeReport(BaseModel):
    """Compiled tree of one document."""
    source_id: str
    node_count: int
    root: NodeInfo


class TokensReport(BaseModel):
    source_id: str
    fragments: List[FragmentInfo]


NodeInfo.model_rebuild()


__all__ = ["FragmentInfo", "NodeInfo", "TreeReport", "TokensReport"]
