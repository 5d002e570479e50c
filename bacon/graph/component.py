"""Reachable actor set for a shortest-path tree."""

from __future__ import annotations

import logging

from bacon.graph.dijkstra import INF, ShortestPathTree
from bacon.graph.store import GraphStore

logger = logging.getLogger(__name__)


class ReachableSet:
    """Actors with a finite cost under ``tree``, computed on first use.

    One instance belongs to one tree. Building a new tree means building a
    new ``ReachableSet``; nothing here notices a re-center on its own.
    """

    def __init__(self, tree: ShortestPathTree, store: GraphStore) -> None:
        self._tree = tree
        self._store = store
        self._actors: list[str] | None = None
        self._members: frozenset[str] = frozenset()
        self._unreachable = 0

    @property
    def tree(self) -> ShortestPathTree:
        return self._tree

    @property
    def center(self) -> str:
        return self._tree.center

    @property
    def loaded(self) -> bool:
        return self._actors is not None

    def _load(self) -> list[str]:
        if self._actors is None:
            actors = [
                key for key, entry in self._tree.items()
                if entry.cost != INF and self._store.is_actor(key)
            ]
            self._actors = actors
            self._members = frozenset(actors)
            self._unreachable = self._store.actor_count - len(actors)
            logger.debug(
                "Reachable from %r: %d actor(s), %d unreachable",
                self._tree.center, len(actors), self._unreachable,
            )
        return self._actors

    @property
    def actors(self) -> list[str]:
        return self._load()

    @property
    def reachable(self) -> int:
        return len(self._load())

    @property
    def unreachable(self) -> int:
        self._load()
        return self._unreachable

    def key(self) -> frozenset[str]:
        """Hashable identity of the set, used to cache rankings."""
        self._load()
        return self._members

    def __iter__(self):
        return iter(self._load())

    def __len__(self) -> int:
        return self.reachable

    def __contains__(self, key: object) -> bool:
        self._load()
        return key in self._members
