"""Error types raised by the graph core.

``VertexNotFound`` and ``EmptyReachableSet`` are recoverable: callers are
expected to catch them and report to the user. ``NegativeEdgeWeight`` aborts
the traversal that found it.
"""

from __future__ import annotations

import enum


class BaconGraphError(Exception):
    """Base class for graph core errors."""


class VertexNotFound(BaconGraphError, LookupError):
    """A query referenced a vertex that is not in the graph."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Vertex {key!r} does not exist in the graph")
        self.key = key


class NegativeEdgeWeight(BaconGraphError, ValueError):
    """A traversal met an edge with a negative cost."""

    def __init__(self, source: str, target: str, cost: int) -> None:
        super().__init__(
            f"Negative edge {source!r} -> {target!r} (cost {cost}) is not allowed"
        )
        self.source = source
        self.target = target
        self.cost = cost


class EmptyReachableSet(BaconGraphError):
    """No actor besides the center is reachable, so there is nothing to average."""

    def __init__(self, center: str) -> None:
        super().__init__(f"No actors are reachable from {center!r}")
        self.center = center


class EdgeInsert(enum.Enum):
    """Outcome of ``GraphStore.insert_edge``."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
