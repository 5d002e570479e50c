"""Bacon-number graph engine.

Shortest-path trees over an actor/movie graph, and the distance analytics
built on them.

Usage::

    from bacon.graph import ActorMovieLoader, CenterSession

    store, stats = ActorMovieLoader().load("imdb.small.txt")
    session = CenterSession(store, "Kevin Bacon")

    path = session.find("Tom Hanks")
    avg = session.average_distance()
    best = session.top_centers(5)
    longest = session.longest_path()
"""

from bacon.graph.analytics import (
    RankingEntry,
    average_distance,
    distance_histogram,
    longest_path,
    movies_of,
    rank_centers,
    suggest_centers,
    top_centers,
)
from bacon.graph.component import ReachableSet
from bacon.graph.dijkstra import ShortestPathTree, TreeEntry, build_tree
from bacon.graph.errors import (
    BaconGraphError,
    EdgeInsert,
    EmptyReachableSet,
    NegativeEdgeWeight,
    VertexNotFound,
)
from bacon.graph.loader import ActorMovieLoader, LoadStats
from bacon.graph.paths import PathResult, find_path
from bacon.graph.session import CenterSession
from bacon.graph.store import Edge, GraphStore, Vertex

__all__ = [
    "ActorMovieLoader",
    "BaconGraphError",
    "CenterSession",
    "Edge",
    "EdgeInsert",
    "EmptyReachableSet",
    "GraphStore",
    "LoadStats",
    "NegativeEdgeWeight",
    "PathResult",
    "RankingEntry",
    "ReachableSet",
    "ShortestPathTree",
    "TreeEntry",
    "Vertex",
    "VertexNotFound",
    "average_distance",
    "build_tree",
    "distance_histogram",
    "find_path",
    "longest_path",
    "movies_of",
    "rank_centers",
    "suggest_centers",
    "top_centers",
]
