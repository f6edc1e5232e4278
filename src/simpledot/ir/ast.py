"""Resolved AST for the DOT subset.

These are the values a successful parse returns: edge chains are expanded,
attribute lists are merged and validated, and defaults declared with
``node``/``edge``/``graph`` statements are applied. Everything is frozen;
a Graph and its components never change after parsing.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

from simpledot.types import AttributeName, GraphKind


@dataclass(frozen=True)
class GraphAttribute:
    name: AttributeName
    value: str


Attributes = tuple[GraphAttribute, ...]


def attribute_value(attributes: Attributes, name: AttributeName | str) -> str | None:
    """Value of ``name`` in ``attributes``, or None if it is not set."""
    for attr in attributes:
        if attr.name == name:
            return attr.value
    return None


@dataclass(frozen=True)
class NodeDecl:
    id: str
    attributes: Attributes = ()

    def get(self, name: AttributeName | str) -> str | None:
        return attribute_value(self.attributes, name)


@dataclass(frozen=True)
class EdgeDecl:
    endpoints: tuple[str, ...]
    attributes: Attributes = ()

    def __post_init__(self) -> None:
        if len(self.endpoints) < 2:
            raise ValueError("an edge needs at least two endpoints")

    @property
    def tail(self) -> str:
        return self.endpoints[0]

    @property
    def head(self) -> str:
        return self.endpoints[-1]

    def get(self, name: AttributeName | str) -> str | None:
        return attribute_value(self.attributes, name)


@dataclass(frozen=True)
class Subgraph:
    graph: Graph

    @property
    def name(self) -> str | None:
        return self.graph.name


@dataclass(frozen=True)
class ClusterSubgraph:
    """A subgraph whose name starts with ``cluster``."""

    graph: Graph

    @property
    def name(self) -> str | None:
        return self.graph.name


Component = Union[NodeDecl, EdgeDecl, Subgraph, ClusterSubgraph]

CLUSTER_PREFIX = "cluster"


def is_cluster_name(name: str | None) -> bool:
    return name is not None and name.startswith(CLUSTER_PREFIX)


@dataclass(frozen=True)
class Graph:
    """A graph or subgraph: header flags, graph attributes and components."""

    kind: GraphKind
    strict: bool = False
    name: str | None = None
    attributes: Attributes = ()
    components: tuple[Component, ...] = field(default_factory=tuple)

    @property
    def directed(self) -> bool:
        return self.kind is GraphKind.Directed

    def get(self, name: AttributeName | str) -> str | None:
        return attribute_value(self.attributes, name)

    def nodes(self) -> list[NodeDecl]:
        """Node declarations directly in this graph (not in subgraphs)."""
        return [c for c in self.components if isinstance(c, NodeDecl)]

    def edges(self) -> list[EdgeDecl]:
        """Edge declarations directly in this graph (not in subgraphs)."""
        return [c for c in self.components if isinstance(c, EdgeDecl)]

    def subgraphs(self) -> list[Subgraph | ClusterSubgraph]:
        return [c for c in self.components if isinstance(c, (Subgraph, ClusterSubgraph))]

    def walk(self) -> Iterator[tuple[Graph, Component]]:
        """Yield ``(owner, component)`` for every component, depth-first."""
        for component in self.components:
            yield self, component
            if isinstance(component, (Subgraph, ClusterSubgraph)):
                yield from component.graph.walk()
