"""Single-source shortest paths (Dijkstra) over a ``GraphStore``.

The queue uses lazy decrease-key: an improved distance pushes a new heap
entry instead of updating the old one. A vertex is finalized the first time
it is popped; any later pop for it is stale and skipped. Entries with equal
cost come off the heap in no particular order, so when several shortest
paths exist which predecessor wins is not defined.

Traversal state lives in a dict created per call, never on the store, so
any number of trees can be built from the same store one after another (or
from inside a callback of another build) without interfering.
"""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Iterator

from bacon.graph.errors import NegativeEdgeWeight
from bacon.graph.store import GraphStore

logger = logging.getLogger(__name__)

INF = math.inf


@dataclass(frozen=True)
class TreeEntry:
    """Cumulative cost from the center and the previous vertex on the path."""
    cost: int
    predecessor: str | None


@dataclass
class _TraversalState:
    cost: float = INF
    predecessor: str | None = None
    finalized: bool = False


@dataclass(order=True)
class _QueueEntry:
    cost: int
    key: str = field(compare=False)


class ShortestPathTree:
    """Result of one Dijkstra run: reached vertex -> ``TreeEntry``.

    Only vertices reachable from the center appear. ``revision`` is the
    store revision the tree was built from.
    """

    def __init__(self, center: str, entries: dict[str, TreeEntry], revision: int = 0) -> None:
        self._center = center
        self._entries = entries
        self._revision = revision

    @property
    def center(self) -> str:
        return self._center

    @property
    def revision(self) -> int:
        return self._revision

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __getitem__(self, key: str) -> TreeEntry:
        return self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, key: str) -> TreeEntry | None:
        return self._entries.get(key)

    def items(self):
        return self._entries.items()

    def cost(self, key: str) -> float:
        """Cost to ``key``, or ``INF`` if the center cannot reach it."""
        entry = self._entries.get(key)
        return INF if entry is None else entry.cost

    def predecessor(self, key: str) -> str | None:
        entry = self._entries.get(key)
        return None if entry is None else entry.predecessor

    def __repr__(self) -> str:
        return f"ShortestPathTree(center={self._center!r}, reached={len(self._entries)})"


def build_tree(store: GraphStore, center: str) -> ShortestPathTree:
    """Run Dijkstra from ``center`` and return its shortest-path tree.

    Raises
    ------
    VertexNotFound
        ``center`` (or its suffixed variant) is not in the store.
    NegativeEdgeWeight
        An edge with a negative cost was met while relaxing.
    """
    start = store.require(center)

    state = {key: _TraversalState() for key in store.graph}
    state[start].cost = 0

    heap = [_QueueEntry(0, start)]
    finalized = 0
    total = len(state)

    while heap and finalized < total:
        entry = heapq.heappop(heap)
        u = state[entry.key]
        if u.finalized:
            continue
        u.finalized = True
        finalized += 1

        for target, cost in store.successors(entry.key):
            if cost < 0:
                raise NegativeEdgeWeight(entry.key, target, cost)
            v = state[target]
            candidate = u.cost + cost
            if candidate < v.cost:
                v.cost = candidate
                v.predecessor = entry.key
                heapq.heappush(heap, _QueueEntry(candidate, target))

    entries = {
        key: TreeEntry(s.cost, s.predecessor)
        for key, s in state.items()
        if s.cost != INF
    }
    logger.debug("Built tree from %r: %d of %d vertices reached", start, len(entries), total)
    return ShortestPathTree(start, entries, store.revision)
