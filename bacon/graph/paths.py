"""Path reconstruction from a shortest-path tree."""

from __future__ import annotations

from dataclasses import dataclass, field

from bacon.graph.dijkstra import ShortestPathTree
from bacon.graph.store import GraphStore


@dataclass(order=True)
class PathResult:
    """Shortest path from ``target`` back to the tree's center.

    ``vertices`` runs target first, center last. Results compare by cost
    only. On actor/movie data the cost is the number of movies on the path,
    i.e. the Bacon number.
    """

    cost: int
    target: str = field(compare=False)
    vertices: list[str] = field(default_factory=list, compare=False)

    @property
    def center(self) -> str:
        return self.vertices[-1]

    @property
    def hops(self) -> int:
        return len(self.vertices) - 1


def walk_predecessors(tree: ShortestPathTree, key: str) -> list[str]:
    """Follow predecessor links from ``key`` to the center, both inclusive."""
    vertices = [key]
    current = tree.predecessor(key)
    while current is not None:
        vertices.append(current)
        current = tree.predecessor(current)
    return vertices


def find_path(
    tree: ShortestPathTree,
    name: str,
    store: GraphStore | None = None,
) -> PathResult | None:
    """Reconstruct the path to ``name``, or return None if it is unreachable.

    With a ``store`` the name goes through the store's lookup (including the
    suffix fallback) first; a name the store does not know is unreachable.
    """
    key: str | None = name
    if store is not None:
        key = store.resolve(name)
    if key is None:
        return None
    entry = tree.get(key)
    if entry is None:
        return None
    return PathResult(cost=entry.cost, target=key, vertices=walk_predecessors(tree, key))
