"""Graph view — flattens a resolved AST Graph into networkx for consumers.

Visualization tooling reads the parsed graph through this view. It creates
the implicit nodes edges refer to, records subgraph and cluster membership,
and resolves missing attributes from the schema defaults. The AST itself is
never modified and never receives defaults.
"""

from __future__ import annotations

from dataclasses import dataclass

import networkx as nx

from simpledot import schema
from simpledot.ir import ast
from simpledot.ir.builder import merge_attributes
from simpledot.types import AttributeName, EntityKind


@dataclass
class NodeData:
    id: str
    attrs: ast.Attributes
    # Innermost enclosing subgraph name, None for root-level nodes.
    subgraph: str | None = None
    declared: bool = True


@dataclass
class EdgeData:
    attrs: ast.Attributes
    subgraph: str | None = None


@dataclass
class SubgraphInfo:
    name: str | None
    cluster: bool
    members: list[str]
    attrs: ast.Attributes
    parent: str | None = None


def resolved_attribute(kind: EntityKind, name: AttributeName | str, explicit: ast.Attributes) -> str | None:
    """Explicit value of ``name`` if set, otherwise the schema default for ``kind``."""
    value = ast.attribute_value(explicit, name)
    if value is not None:
        return value
    return schema.default_for(kind, name)


class GraphView:
    """A read-only, flattened view of a resolved Graph.

    Wraps a networkx graph: MultiDiGraph/MultiGraph normally, DiGraph/Graph
    for strict graphs since those never carry parallel edges.
    """

    def __init__(
        self,
        graph: ast.Graph,
        nx_graph: nx.Graph,
        subgraphs: list[SubgraphInfo],
    ) -> None:
        self.graph = graph
        self.nx_graph = nx_graph
        self.subgraphs = subgraphs

    @classmethod
    def from_ast(cls, graph: ast.Graph) -> GraphView:
        """Build a GraphView from a resolved Graph."""
        nx_graph = _empty_nx_graph(graph)
        subgraphs: list[SubgraphInfo] = []
        _collect(graph, nx_graph, subgraphs, owner=None)
        return cls(graph=graph, nx_graph=nx_graph, subgraphs=subgraphs)

    # ── Topology ──────────────────────────────────────────────────────────────

    def node_count(self) -> int:
        return self.nx_graph.number_of_nodes()

    def edge_count(self) -> int:
        return self.nx_graph.number_of_edges()

    def node_ids(self) -> list[str]:
        return list(self.nx_graph.nodes)

    def in_degree(self, node_id: str) -> int:
        if node_id not in self.nx_graph:
            return 0
        if self.nx_graph.is_directed():
            return self.nx_graph.in_degree(node_id)
        return self.nx_graph.degree(node_id)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self.nx_graph:
            return 0
        if self.nx_graph.is_directed():
            return self.nx_graph.out_degree(node_id)
        return self.nx_graph.degree(node_id)

    def is_dag(self) -> bool:
        return self.nx_graph.is_directed() and nx.is_directed_acyclic_graph(self.nx_graph)

    def clusters(self) -> list[SubgraphInfo]:
        return [sg for sg in self.subgraphs if sg.cluster]

    # ── Attribute resolution ──────────────────────────────────────────────────

    def node_attribute(self, node_id: str, name: AttributeName | str) -> str | None:
        data: NodeData = self.nx_graph.nodes[node_id]["data"]
        return resolved_attribute(EntityKind.Node, name, data.attrs)

    def edge_attributes(self, tail: str, head: str) -> list[ast.Attributes]:
        """Attributes of every edge between ``tail`` and ``head``."""
        if not self.nx_graph.has_edge(tail, head):
            return []
        if self.nx_graph.is_multigraph():
            return [d["data"].attrs for d in self.nx_graph.get_edge_data(tail, head).values()]
        return [self.nx_graph.edges[tail, head]["data"].attrs]

    def edge_attribute(self, tail: str, head: str, name: AttributeName | str) -> str | None:
        """Resolved ``name`` on the first edge between ``tail`` and ``head``."""
        found = self.edge_attributes(tail, head)
        explicit = found[0] if found else ()
        return resolved_attribute(EntityKind.Edge, name, explicit)

    def graph_attribute(self, name: AttributeName | str) -> str | None:
        return resolved_attribute(EntityKind.Graph, name, self.graph.attributes)


def _empty_nx_graph(graph: ast.Graph) -> nx.Graph:
    if graph.strict:
        return nx.DiGraph() if graph.directed else nx.Graph()
    return nx.MultiDiGraph() if graph.directed else nx.MultiGraph()


def _ensure_node(nx_graph: nx.Graph, node_id: str, subgraph: str | None) -> None:
    if node_id not in nx_graph:
        nx_graph.add_node(node_id, data=NodeData(id=node_id, attrs=(), subgraph=subgraph, declared=False))


def _collect(
    graph: ast.Graph,
    nx_graph: nx.Graph,
    subgraphs: list[SubgraphInfo],
    owner: str | None,
) -> list[str]:
    """Add ``graph``'s components to ``nx_graph``; return the node ids it mentions."""
    members: dict[str, None] = {}
    for component in graph.components:
        if isinstance(component, ast.NodeDecl):
            existing = nx_graph.nodes[component.id]["data"] if component.id in nx_graph else None
            if existing is not None and existing.declared:
                # Redeclared in another graph level: later attributes win.
                existing.attrs = merge_attributes(existing.attrs, component.attributes)
            else:
                data = NodeData(id=component.id, attrs=component.attributes, subgraph=owner)
                nx_graph.add_node(component.id, data=data)
            members.setdefault(component.id, None)
        elif isinstance(component, ast.EdgeDecl):
            for node_id in component.endpoints:
                _ensure_node(nx_graph, node_id, owner)
                members.setdefault(node_id, None)
            edge_data = EdgeData(attrs=component.attributes, subgraph=owner)
            for tail, head in zip(component.endpoints, component.endpoints[1:]):
                nx_graph.add_edge(tail, head, data=edge_data)
        else:
            info = SubgraphInfo(
                name=component.name,
                cluster=isinstance(component, ast.ClusterSubgraph),
                members=[],
                attrs=component.graph.attributes,
                parent=owner,
            )
            subgraphs.append(info)
            info.members = _collect(component.graph, nx_graph, subgraphs, owner=component.name)
            for node_id in info.members:
                members.setdefault(node_id, None)
    return list(members)
