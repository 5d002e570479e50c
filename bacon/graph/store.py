"""Graph store: vertices and directed, integer-cost edges.

Backed by a ``networkx.DiGraph``. A DiGraph keeps one edge per ordered
(source, target) pair and indexes every edge from both endpoints through its
successor and predecessor maps, which is exactly what the store needs.

Vertex and edge values handed out by the store are immutable snapshots;
the store stays the only owner of the underlying records.

Usage::

    store = GraphStore()
    store.insert_vertex("Kevin Bacon", actor=True)
    store.insert_vertex("Footloose")
    store.insert_edge("Kevin Bacon", "Footloose", 0)
    store.insert_edge("Footloose", "Kevin Bacon", 1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

import networkx as nx

from bacon.graph.errors import EdgeInsert, VertexNotFound

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = " (I)"


@dataclass(frozen=True)
class Vertex:
    """A graph vertex. ``actor`` is False for movie vertices."""

    key: str
    actor: bool = False

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Edge:
    """A directed edge ``source -> target``."""

    source: str
    target: str
    cost: int

    def __str__(self) -> str:
        return f"( {self.source}, {self.target}, {self.cost} )"


class GraphStore:
    """Mutable directed graph of actor and movie vertices.

    Parameters
    ----------
    suffix:
        Disambiguation suffix tried when a bare key is missing. IMDb-style
        data lists the first of several same-named people as ``"Name (I)"``,
        so ``"Kevin Bacon"`` resolves to ``"Kevin Bacon (I)"`` when only the
        suffixed vertex exists. Pass ``""`` to disable the fallback.
    """

    def __init__(self, suffix: str = DEFAULT_SUFFIX) -> None:
        self._graph = nx.DiGraph()
        self._suffix = suffix
        self._actor_count = 0
        self._revision = 0

    # -- Introspection -------------------------------------------------------

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    @property
    def suffix(self) -> str:
        return self._suffix

    @property
    def revision(self) -> int:
        """Counter bumped by every mutation. Trees record the value they saw."""
        return self._revision

    @property
    def vertex_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    @property
    def actor_count(self) -> int:
        return self._actor_count

    def __len__(self) -> int:
        return self.vertex_count

    def __contains__(self, key: object) -> bool:
        return key in self._graph

    def vertices(self) -> Iterator[Vertex]:
        for key, data in self._graph.nodes(data=True):
            yield Vertex(key, data.get("actor", False))

    def actors(self) -> Iterator[str]:
        """Keys of all actor vertices, in insertion order."""
        for key, data in self._graph.nodes(data=True):
            if data.get("actor"):
                yield key

    def is_actor(self, key: str) -> bool:
        return bool(self._graph.nodes[key].get("actor")) if key in self._graph else False

    # -- Lookup --------------------------------------------------------------

    def resolve(self, key: str) -> str | None:
        """Return the stored key for ``key``, trying the suffixed variant once."""
        if key in self._graph:
            return key
        if self._suffix:
            fallback = key + self._suffix
            if fallback in self._graph:
                return fallback
        return None

    def require(self, key: str) -> str:
        """Like ``resolve`` but raise ``VertexNotFound`` instead of returning None."""
        resolved = self.resolve(key)
        if resolved is None:
            raise VertexNotFound(key)
        return resolved

    def get_vertex(self, key: str) -> Vertex | None:
        resolved = self.resolve(key)
        if resolved is None:
            return None
        return Vertex(resolved, self._graph.nodes[resolved].get("actor", False))

    def get_edge(self, source: str, target: str) -> Edge | None:
        u = self.resolve(source)
        v = self.resolve(target)
        if u is None or v is None or not self._graph.has_edge(u, v):
            return None
        return Edge(u, v, self._graph[u][v]["cost"])

    def edge_cost(self, source: str, target: str) -> int:
        """Cost of the edge ``source -> target`` by exact key."""
        return self._graph[source][target]["cost"]

    # -- Adjacency -----------------------------------------------------------

    def out_edges(self, key: str) -> list[Edge]:
        u = self.require(key)
        return [Edge(u, v, data["cost"]) for v, data in self._graph.succ[u].items()]

    def in_edges(self, key: str) -> list[Edge]:
        v = self.require(key)
        return [Edge(u, v, data["cost"]) for u, data in self._graph.pred[v].items()]

    def incident_edges(self, key: str) -> list[Edge]:
        """Inbound then outbound edges of ``key``."""
        return self.in_edges(key) + self.out_edges(key)

    def successors(self, key: str) -> Iterator[tuple[str, int]]:
        """(target, cost) pairs for the outgoing edges of an exact key.

        Used on the traversal hot path, so no lookup fallback.
        """
        for v, data in self._graph.succ[key].items():
            yield v, data["cost"]

    def adjacent_vertices(self, key: str) -> list[str]:
        """Vertices sharing an edge with ``key`` in either direction."""
        k = self.resolve(key)
        if k is None:
            return []
        return list(self._graph.pred[k]) + list(self._graph.succ[k])

    def are_adjacent(self, a: str, b: str) -> bool:
        u = self.require(a)
        v = self.require(b)
        return self._graph.has_edge(u, v) or self._graph.has_edge(v, u)

    # -- Mutation ------------------------------------------------------------

    def insert_vertex(self, key: str, actor: bool = False) -> Vertex:
        """Add a vertex. An existing key is returned unchanged."""
        if key in self._graph:
            return Vertex(key, self._graph.nodes[key].get("actor", False))
        self._graph.add_node(key, actor=actor)
        if actor:
            self._actor_count += 1
        self._revision += 1
        return Vertex(key, actor)

    def insert_edge(self, source: str, target: str, cost: int) -> EdgeInsert:
        """Add the edge ``source -> target`` or overwrite the cost of an existing one.

        Negative costs are accepted here; traversals reject them.
        """
        u = self.require(source)
        v = self.require(target)
        self._revision += 1
        if self._graph.has_edge(u, v):
            self._graph[u][v]["cost"] = cost
            return EdgeInsert.OVERWRITTEN
        self._graph.add_edge(u, v, cost=cost)
        return EdgeInsert.CREATED

    def remove_edge(self, source: str, target: str) -> bool:
        u = self.resolve(source)
        v = self.resolve(target)
        if u is None or v is None or not self._graph.has_edge(u, v):
            return False
        self._graph.remove_edge(u, v)
        self._revision += 1
        return True

    def remove_vertex(self, key: str) -> bool:
        """Remove a vertex and every edge into or out of it."""
        k = self.resolve(key)
        if k is None:
            return False
        if self._graph.nodes[k].get("actor"):
            self._actor_count -= 1
        dropped = self._graph.in_degree(k) + self._graph.out_degree(k)
        # a self-loop is counted by both degrees
        if self._graph.has_edge(k, k):
            dropped -= 1
        self._graph.remove_node(k)
        self._revision += 1
        logger.debug("Removed vertex %r and %d incident edge(s)", k, dropped)
        return True

    def clear(self) -> None:
        self._graph.clear()
        self._actor_count = 0
        self._revision += 1

    # -- Debugging -----------------------------------------------------------

    def describe(self) -> str:
        """One line per vertex listing its inbound and outbound edges."""
        lines = []
        for i, key in enumerate(self._graph.nodes):
            edges = "".join(str(e) for e in self.incident_edges(key))
            lines.append(f"Vertex {i}: {key} || Edges: {edges}")
        return "\n".join(lines)
