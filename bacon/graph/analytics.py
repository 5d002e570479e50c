"""Distance analytics over a shortest-path tree.

Every function takes the tree (and, where actors matter, its
``ReachableSet``) explicitly, so results are always tied to one center.
``CenterSession`` in ``bacon.graph.session`` wires these together and
caches their results per center.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from bacon.graph.component import ReachableSet
from bacon.graph.dijkstra import INF, ShortestPathTree, build_tree
from bacon.graph.errors import EmptyReachableSet
from bacon.graph.paths import PathResult, walk_predecessors
from bacon.graph.store import GraphStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

DEFAULT_BUCKETS = 10


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(order=True)
class RankingEntry:
    """A candidate center and its average distance. Compares by average only."""
    average: float
    vertex: str = field(compare=False)

    def __str__(self) -> str:
        return f"{self.average:.4f}   \t{self.vertex}"


# ---------------------------------------------------------------------------
# Average distance
# ---------------------------------------------------------------------------


def average_distance(tree: ShortestPathTree, reachable: ReachableSet) -> float:
    """Mean cost from the center to every other reachable actor.

    Costs of zero (the center itself) and unreachable actors count in
    neither the sum nor the denominator.

    Raises
    ------
    EmptyReachableSet
        No actor other than the center has a finite, non-zero cost.
    """
    total = 0
    count = 0
    for key in reachable:
        cost = tree.cost(key)
        if cost != 0 and cost != INF:
            total += cost
            count += 1
    if count == 0:
        raise EmptyReachableSet(tree.center)
    return total / count


# ---------------------------------------------------------------------------
# Top centers
# ---------------------------------------------------------------------------


def rank_centers(
    store: GraphStore,
    reachable: ReachableSet,
    progress: ProgressCallback | None = None,
) -> list[RankingEntry]:
    """Rank every reachable actor by its own average distance, ascending.

    Runs one full Dijkstra per candidate, so this is O(R * (V + E) log V)
    for R reachable actors. ``progress(done, total)`` is called after each
    candidate. Candidates that cannot reach any other actor are left out.
    """
    candidates = list(reachable)
    total = len(candidates)
    ranking: list[RankingEntry] = []

    for done, key in enumerate(candidates, start=1):
        tree = build_tree(store, key)
        try:
            avg = average_distance(tree, ReachableSet(tree, store))
        except EmptyReachableSet:
            logger.debug("Skipping %r: reaches no other actor", key)
        else:
            ranking.append(RankingEntry(avg, key))
        if progress is not None:
            progress(done, total)

    if not ranking:
        raise EmptyReachableSet(reachable.center)

    ranking.sort()
    logger.info("Ranked %d center(s) reachable from %r", len(ranking), reachable.center)
    return ranking


def top_centers(
    store: GraphStore,
    reachable: ReachableSet,
    n: int,
    progress: ProgressCallback | None = None,
) -> list[RankingEntry]:
    """The ``n`` reachable actors with the lowest average distance."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return rank_centers(store, reachable, progress)[:n]


# ---------------------------------------------------------------------------
# Histogram and longest path
# ---------------------------------------------------------------------------


def distance_histogram(
    tree: ShortestPathTree,
    reachable: ReachableSet,
    buckets: int = DEFAULT_BUCKETS,
) -> list[int]:
    """Count reachable actors per cost. Index i holds the count at cost i.

    Starts with ``buckets`` zeroed slots and grows when a larger cost shows
    up; the center lands in bucket 0.
    """
    counts = [0] * buckets
    for key in reachable:
        cost = tree.cost(key)
        if cost == INF:
            continue
        if cost >= len(counts):
            counts.extend([0] * (cost + 1 - len(counts)))
        counts[cost] += 1
    return counts


def longest_path(
    tree: ShortestPathTree,
    histogram: list[int],
    reachable: ReachableSet,
) -> PathResult | None:
    """One reachable actor at the largest cost in ``histogram``, with its path.

    Which actor is returned when several share that cost is not defined.
    Returns None when the histogram is all zeros.
    """
    highest = None
    for i, count in enumerate(histogram):
        if count:
            highest = i
    if highest is None:
        return None

    for key in reachable:
        if tree.cost(key) == highest:
            return PathResult(cost=highest, target=key, vertices=walk_predecessors(tree, key))
    return None


# ---------------------------------------------------------------------------
# Adjacency queries
# ---------------------------------------------------------------------------


def movies_of(store: GraphStore, name: str) -> list[str]:
    """Destinations of the outgoing edges of ``name``; empty if it is unknown."""
    key = store.resolve(name)
    if key is None:
        return []
    return [target for target, _ in store.successors(key)]


def suggest_centers(
    store: GraphStore,
    limit: int = 20,
    min_movies: int = 10,
) -> list[tuple[str, int]]:
    """Up to ``limit`` actors with more than ``min_movies`` outgoing edges.

    Offered to the user when the requested center is not in the graph.
    """
    suggestions: list[tuple[str, int]] = []
    for key in store.actors():
        degree = store.graph.out_degree(key)
        if degree > min_movies:
            suggestions.append((key, degree))
            if len(suggestions) >= limit:
                break
    return suggestions
