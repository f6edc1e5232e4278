"""Syntax tree for the DOT subset.

These types mirror the grammar one-to-one and carry source positions. They are
unvalidated: attribute names and values are still raw strings, edge chains are
not expanded, and defaults are not applied. The resolver in ``ir.builder``
turns them into the final ``ir.ast`` model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from simpledot.errors import SourcePosition
from simpledot.types import EntityKind, GraphKind


@dataclass
class AttrItem:
    """One ``name = value`` pair inside a bracketed attribute list."""

    name: str
    value: str
    position: SourcePosition


@dataclass
class NodeRef:
    id: str
    position: SourcePosition


@dataclass
class NodeStmt:
    node: NodeRef
    attr_lists: list[list[AttrItem]] = field(default_factory=list)

    @property
    def position(self) -> SourcePosition:
        return self.node.position


@dataclass
class EdgeStmt:
    # Two or more endpoints, in source order.
    endpoints: list[Endpoint]
    attr_lists: list[list[AttrItem]] = field(default_factory=list)
    position: SourcePosition = field(default_factory=SourcePosition.start)


@dataclass
class AttrStmt:
    """``graph [...]``, ``node [...]`` or ``edge [...]``."""

    target: EntityKind
    attr_lists: list[list[AttrItem]]
    position: SourcePosition


@dataclass
class AssignStmt:
    """``ID = ID`` at statement level: an immediate graph attribute."""

    item: AttrItem

    @property
    def position(self) -> SourcePosition:
        return self.item.position


@dataclass
class SubgraphStmt:
    name: str | None
    statements: list[Statement] = field(default_factory=list)
    position: SourcePosition = field(default_factory=SourcePosition.start)


Endpoint = Union[NodeRef, SubgraphStmt]
Statement = Union[NodeStmt, EdgeStmt, AttrStmt, AssignStmt, SubgraphStmt]


@dataclass
class GraphTree:
    kind: GraphKind
    strict: bool = False
    name: str | None = None
    statements: list[Statement] = field(default_factory=list)
