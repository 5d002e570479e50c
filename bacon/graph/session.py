"""Center session: one store, one current center, and everything derived from it.

Usage::

    session = CenterSession(store, "Kevin Bacon")
    session.find("Tom Hanks")
    session.average_distance()
    session.recenter("Tom Hanks")
    session.top_centers(5, progress=lambda done, total: ...)

The tree, the reachable set and the histogram are all tied to the current
center. ``recenter`` drops them, and so does any mutation of the store: the
next query notices the store revision moved and rebuilds the tree.
"""

from __future__ import annotations

import logging

from bacon.graph import analytics
from bacon.graph.analytics import ProgressCallback, RankingEntry
from bacon.graph.component import ReachableSet
from bacon.graph.dijkstra import ShortestPathTree, build_tree
from bacon.graph.paths import PathResult, find_path
from bacon.graph.store import GraphStore

logger = logging.getLogger(__name__)


class CenterSession:
    """Query surface over a ``GraphStore`` for one center at a time.

    Parameters
    ----------
    store:
        The graph to query. The session does not copy it; callers must not
        mutate it while a query is running.
    center:
        Initial center. Raises ``VertexNotFound`` if absent.
    histogram_buckets:
        Starting size of the distance histogram.
    """

    def __init__(
        self,
        store: GraphStore,
        center: str,
        histogram_buckets: int = analytics.DEFAULT_BUCKETS,
    ) -> None:
        self._store = store
        self._histogram_buckets = histogram_buckets
        self._rankings: dict[frozenset[str], list[RankingEntry]] = {}
        self._install(build_tree(store, center))

    def _install(self, tree: ShortestPathTree) -> None:
        self._tree = tree
        self._reachable: ReachableSet | None = None
        self._histogram: list[int] | None = None

    # -- Center --------------------------------------------------------------

    @property
    def store(self) -> GraphStore:
        return self._store

    @property
    def center(self) -> str:
        return self._tree.center

    @property
    def tree(self) -> ShortestPathTree:
        """The tree for the current center, rebuilt if the store has changed.

        If the center vertex itself has been removed, the rebuild raises
        ``VertexNotFound`` on every query until ``recenter`` picks a center
        that exists.
        """
        if self._tree.revision != self._store.revision:
            logger.debug("Store changed since the tree for %r was built; rebuilding", self.center)
            self._install(build_tree(self._store, self.center))
            self._rankings.clear()
        return self._tree

    def recenter(self, name: str) -> str:
        """Make ``name`` the center and return its resolved key.

        The new tree is built before anything is dropped, so an unknown
        name raises ``VertexNotFound`` and leaves the session as it was.
        """
        tree = build_tree(self._store, name)
        if tree.revision != self._tree.revision:
            self._rankings.clear()
        self._install(tree)
        logger.info("Recentered on %r", tree.center)
        return tree.center

    # -- Derived caches ------------------------------------------------------

    @property
    def reachable(self) -> ReachableSet:
        tree = self.tree
        if self._reachable is None:
            self._reachable = ReachableSet(tree, self._store)
        return self._reachable

    def histogram(self) -> list[int]:
        reachable = self.reachable
        if self._histogram is None:
            self._histogram = analytics.distance_histogram(
                self._tree, reachable, self._histogram_buckets
            )
        return self._histogram

    # -- Queries -------------------------------------------------------------

    def find(self, name: str) -> PathResult | None:
        return find_path(self.tree, name, self._store)

    def average_distance(self) -> float:
        reachable = self.reachable
        return analytics.average_distance(self._tree, reachable)

    def top_centers(self, n: int, progress: ProgressCallback | None = None) -> list[RankingEntry]:
        """Top ``n`` centers of the current reachable set.

        The full ranking is computed once per distinct reachable set, so
        re-centering inside the same component reuses it. Raises
        ``ValueError`` for a negative ``n``.
        """
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        reachable = self.reachable
        key = reachable.key()
        ranking = self._rankings.get(key)
        if ranking is None:
            ranking = analytics.rank_centers(self._store, reachable, progress)
            self._rankings[key] = ranking
        return ranking[:n]

    def longest_path(self) -> PathResult | None:
        histogram = self.histogram()
        return analytics.longest_path(self._tree, histogram, self.reachable)

    def movies_of(self, name: str) -> list[str]:
        return analytics.movies_of(self._store, name)
