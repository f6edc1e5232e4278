"""Shared type definitions for simpledot.

Enums used across the lexer, parser, schema, resolver and the graph view.
"""

from __future__ import annotations

from enum import Enum, auto


class GraphKind(Enum):
    Directed = auto()  # digraph, uses ->
    Undirected = auto()  # graph, uses --

    @property
    def edge_op(self) -> str:
        return "->" if self is GraphKind.Directed else "--"

    @property
    def keyword(self) -> str:
        return "digraph" if self is GraphKind.Directed else "graph"


class EntityKind(Enum):
    Graph = auto()
    Node = auto()
    Edge = auto()


class ValueType(Enum):
    Color = auto()
    ColorList = auto()
    String = auto()
    Double = auto()
    Bool = auto()
    BoolOrString = auto()
    LblString = auto()


class AttributeName(str, Enum):
    """The closed set of attribute names the subset accepts."""

    bgcolor = "bgcolor"
    color = "color"
    comment = "comment"
    fontcolor = "fontcolor"
    fontname = "fontname"
    fontsize = "fontsize"
    height = "height"
    image = "image"
    imagepos = "imagepos"
    imagescale = "imagescale"
    label = "label"
    width = "width"

    @classmethod
    def lookup(cls, name: str) -> AttributeName | None:
        try:
            return cls(name)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value
