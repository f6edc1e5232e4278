"""Resolved representation: AST, builder, and the networkx graph view."""

from simpledot.ir.ast import (
    ClusterSubgraph,
    Component,
    EdgeDecl,
    Graph,
    GraphAttribute,
    NodeDecl,
    Subgraph,
)
from simpledot.ir.builder import build
from simpledot.ir.graph import EdgeData, GraphView, NodeData, SubgraphInfo

__all__ = [
    "ClusterSubgraph",
    "Component",
    "EdgeData",
    "EdgeDecl",
    "Graph",
    "GraphAttribute",
    "GraphView",
    "NodeData",
    "NodeDecl",
    "Subgraph",
    "SubgraphInfo",
    "build",
]
