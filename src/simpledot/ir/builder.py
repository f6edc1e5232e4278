"""AST builder — resolves the syntax tree into the final ``ir.ast`` Graph.

Walks the tree depth-first and, per graph level:

- expands edge chains into one EdgeDecl per consecutive endpoint pair,
- concatenates bracketed attribute groups and merges them last-write-wins,
- applies ``graph``/``node``/``edge`` defaults declared earlier in the graph,
  including to nodes an edge reaches first,
- coalesces repeated edges when the graph is strict,
- validates every attribute against the schema before attaching it.

Defaults travel as an immutable ``Defaults`` snapshot: a subgraph starts from
the snapshot active where it opens and never leaks its own defaults back out.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from simpledot.errors import DotAttributeError
from simpledot.ir.ast import (
    Attributes,
    ClusterSubgraph,
    Component,
    EdgeDecl,
    Graph,
    GraphAttribute,
    NodeDecl,
    Subgraph,
    is_cluster_name,
)
from simpledot.syntax.types import (
    AssignStmt,
    AttrItem,
    AttrStmt,
    EdgeStmt,
    GraphTree,
    NodeRef,
    NodeStmt,
    Statement,
    SubgraphStmt,
)
from simpledot.types import EntityKind, GraphKind
from simpledot.validator import resolve_name, validate_attribute

logger = logging.getLogger(__name__)


def merge_attributes(*groups: Iterable[GraphAttribute]) -> Attributes:
    """Concatenate attribute groups; a repeated name keeps only its last value.

    The surviving entry takes the position of the last occurrence.
    """
    merged: dict[str, GraphAttribute] = {}
    for group in groups:
        for attr in group:
            merged.pop(attr.name, None)
            merged[attr.name] = attr
    return tuple(merged.values())


def validate_items(attr_lists: Iterable[Iterable[AttrItem]], kind: EntityKind) -> Attributes:
    """Validate raw ``name = value`` items for ``kind`` and merge them."""
    attrs: list[GraphAttribute] = []
    for group in attr_lists:
        for item in group:
            try:
                name = resolve_name(item.name)
                value = validate_attribute(name, kind, item.value)
            except DotAttributeError as e:
                raise e.at(item.position) from None
            attrs.append(GraphAttribute(name=name, value=value))
    return merge_attributes(attrs)


@dataclass(frozen=True)
class Defaults:
    """Attribute defaults active at one point of one graph."""

    graph: Attributes = ()
    node: Attributes = ()
    edge: Attributes = ()

    def for_kind(self, kind: EntityKind) -> Attributes:
        if kind is EntityKind.Graph:
            return self.graph
        if kind is EntityKind.Node:
            return self.node
        return self.edge

    def extend(self, kind: EntityKind, attrs: Attributes) -> Defaults:
        merged = merge_attributes(self.for_kind(kind), attrs)
        return replace(self, **{kind.name.lower(): merged})


class _GraphBuilder:
    """Accumulates the components of one graph level."""

    def __init__(
        self,
        kind: GraphKind,
        strict: bool,
        name: str | None,
        defaults: Defaults,
    ) -> None:
        self.kind = kind
        self.strict = strict
        self.name = name
        self.defaults = defaults
        self.attributes: Attributes = defaults.graph
        self.components: list[Component] = []
        self._node_index: dict[str, int] = {}
        self._edge_index: dict[tuple[str, str], int] = {}
        # Every node id this graph mentions, in first-appearance order.
        self.mentioned: dict[str, None] = {}

    # ── Statements ────────────────────────────────────────────────────────────

    def add_statements(self, statements: Iterable[Statement]) -> None:
        for stmt in statements:
            if isinstance(stmt, AttrStmt):
                self.add_attr_stmt(stmt)
            elif isinstance(stmt, AssignStmt):
                attrs = validate_items([[stmt.item]], EntityKind.Graph)
                self.attributes = merge_attributes(self.attributes, attrs)
            elif isinstance(stmt, NodeStmt):
                self.add_node(stmt)
            elif isinstance(stmt, EdgeStmt):
                self.add_edges(stmt)
            elif isinstance(stmt, SubgraphStmt):
                self.add_subgraph(stmt)
            else:
                raise TypeError(f"unknown statement type: {type(stmt).__name__}")

    def add_attr_stmt(self, stmt: AttrStmt) -> None:
        attrs = validate_items(stmt.attr_lists, stmt.target)
        self.defaults = self.defaults.extend(stmt.target, attrs)
        if stmt.target is EntityKind.Graph:
            self.attributes = merge_attributes(self.attributes, attrs)

    def add_node(self, stmt: NodeStmt) -> None:
        explicit = validate_items(stmt.attr_lists, EntityKind.Node)
        node_id = stmt.node.id
        self._mention(node_id)
        index = self._node_index.get(node_id)
        if index is None:
            self._node_index[node_id] = len(self.components)
            attributes = merge_attributes(self.defaults.node, explicit)
            self.components.append(NodeDecl(id=node_id, attributes=attributes))
            return
        existing = self.components[index]
        assert isinstance(existing, NodeDecl)
        self.components[index] = replace(existing, attributes=merge_attributes(existing.attributes, explicit))

    def add_subgraph(self, stmt: SubgraphStmt) -> list[str]:
        """Resolve a nested subgraph, append it, and return the node ids it mentions."""
        child = _GraphBuilder(self.kind, self.strict, stmt.name, self.defaults)
        child.add_statements(stmt.statements)
        graph = child.finish()
        component = ClusterSubgraph(graph) if is_cluster_name(stmt.name) else Subgraph(graph)
        self.components.append(component)
        ids = list(child.mentioned)
        for node_id in ids:
            self._mention(node_id)
        logger.debug("resolved subgraph %r with %d components", stmt.name, len(graph.components))
        return ids

    def add_edges(self, stmt: EdgeStmt) -> None:
        explicit = validate_items(stmt.attr_lists, EntityKind.Edge)
        resolved = merge_attributes(self.defaults.edge, explicit)

        groups: list[list[str]] = []
        for endpoint in stmt.endpoints:
            if isinstance(endpoint, NodeRef):
                self._introduce(endpoint.id)
                groups.append([endpoint.id])
            else:
                groups.append(self.add_subgraph(endpoint))

        for tails, heads in zip(groups, groups[1:]):
            for tail in tails:
                for head in heads:
                    self._add_edge(tail, head, resolved, explicit)

    def _add_edge(self, tail: str, head: str, resolved: Attributes, explicit: Attributes) -> None:
        key = self._edge_key(tail, head)
        index = self._edge_index.get(key) if self.strict else None
        if index is None:
            self._edge_index.setdefault(key, len(self.components))
            self.components.append(EdgeDecl(endpoints=(tail, head), attributes=resolved))
            return
        existing = self.components[index]
        assert isinstance(existing, EdgeDecl)
        logger.debug("strict graph: merging repeated edge %s %s %s", tail, self.kind.edge_op, head)
        self.components[index] = replace(existing, attributes=merge_attributes(existing.attributes, explicit))

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _edge_key(self, tail: str, head: str) -> tuple[str, str]:
        if self.kind is GraphKind.Undirected and head < tail:
            return (head, tail)
        return (tail, head)

    def _mention(self, node_id: str) -> None:
        self.mentioned.setdefault(node_id, None)

    def _introduce(self, node_id: str) -> None:
        """Mention an edge endpoint, declaring it if node defaults are active.

        A node first created by an edge still takes the ``node [...]`` defaults
        in effect at that point, so it gets a NodeDecl carrying them.
        """
        if node_id not in self.mentioned and self.defaults.node:
            self._node_index[node_id] = len(self.components)
            self.components.append(NodeDecl(id=node_id, attributes=self.defaults.node))
        self._mention(node_id)

    def finish(self) -> Graph:
        return Graph(
            kind=self.kind,
            strict=self.strict,
            name=self.name,
            attributes=self.attributes,
            components=tuple(self.components),
        )


def build(tree: GraphTree) -> Graph:
    """Resolve a syntax tree into a validated Graph.

    Raises:
        DotAttributeError: On the first unknown, misapplied or malformed attribute.
    """
    builder = _GraphBuilder(tree.kind, tree.strict, tree.name, Defaults())
    builder.add_statements(tree.statements)
    graph = builder.finish()
    logger.debug(
        "resolved graph %r: %d components, %d attributes",
        graph.name,
        len(graph.components),
        len(graph.attributes),
    )
    return graph
