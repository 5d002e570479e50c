"""Tests for bacon.graph analytics — reachable sets, distances, rankings, sessions.

Uses a small cast around Kevin Bacon:

    Kevin Bacon (I) -- Footloose -- Lori Singer
    Kevin Bacon (I) -- Apollo 13 -- Tom Hanks -- Big -- Elizabeth Perkins
    Loner -- Solo Film                              (separate component)

From Kevin Bacon the Bacon numbers are Tom Hanks 1, Lori Singer 1 and
Elizabeth Perkins 2; Loner is unreachable.
"""

import pytest

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
from bacon.graph.dijkstra import build_tree
from bacon.graph.errors import EmptyReachableSet, VertexNotFound
from bacon.graph.loader import ActorMovieLoader
from bacon.graph.session import CenterSession
from bacon.graph.store import GraphStore


RECORDS = [
    "Kevin Bacon (I)|Footloose",
    "Kevin Bacon (I)|Apollo 13",
    "Tom Hanks|Apollo 13",
    "Tom Hanks|Big",
    "Elizabeth Perkins|Big",
    "Lori Singer|Footloose",
    "Loner|Solo Film",
]


@pytest.fixture
def store() -> GraphStore:
    store, _ = ActorMovieLoader().load_lines(RECORDS)
    return store


@pytest.fixture
def tree(store):
    return build_tree(store, "Kevin Bacon")


@pytest.fixture
def reachable(tree, store) -> ReachableSet:
    return ReachableSet(tree, store)


def _chain(length: int) -> GraphStore:
    """Actors a0 -> a1 -> ... each one step further from a0."""
    store = GraphStore()
    for i in range(length):
        store.insert_vertex(f"a{i}", actor=True)
    for i in range(length - 1):
        store.insert_edge(f"a{i}", f"a{i + 1}", 1)
    return store


# ---------------------------------------------------------------------------
# ReachableSet
# ---------------------------------------------------------------------------


class TestReachableSet:
    def test_reachable_actors(self, reachable):
        assert set(reachable) == {
            "Kevin Bacon (I)", "Tom Hanks", "Lori Singer", "Elizabeth Perkins",
        }
        assert reachable.reachable == 4
        assert reachable.unreachable == 1
        assert "Loner" not in reachable
        # movies are never part of the set
        assert "Footloose" not in reachable

    def test_lazy_and_cached(self, reachable):
        assert not reachable.loaded
        first = reachable.actors
        assert reachable.loaded
        assert reachable.actors is first

    def test_key_is_hashable(self, reachable):
        assert reachable.key() == frozenset(reachable.actors)
        assert {reachable.key(): 1}

    def test_membership_loads_once(self, reachable):
        assert "Tom Hanks" in reachable
        assert reachable.loaded
        assert reachable.key() is reachable.key()


# ---------------------------------------------------------------------------
# Average distance
# ---------------------------------------------------------------------------


class TestAverageDistance:
    def test_excludes_center_and_unreachable(self, tree, reachable):
        assert average_distance(tree, reachable) == pytest.approx(4 / 3)

    def test_no_other_actor_is_an_error(self, store):
        tree = build_tree(store, "Loner")
        with pytest.raises(EmptyReachableSet) as exc:
            average_distance(tree, ReachableSet(tree, store))
        assert exc.value.center == "Loner"


# ---------------------------------------------------------------------------
# Top centers
# ---------------------------------------------------------------------------


class TestTopCenters:
    def test_ranking_is_ascending(self, store, reachable):
        ranking = rank_centers(store, reachable)
        averages = [entry.average for entry in ranking]
        assert averages == sorted(averages)
        assert {e.vertex for e in ranking[:2]} == {"Kevin Bacon (I)", "Tom Hanks"}
        assert {e.vertex for e in ranking[2:]} == {"Lori Singer", "Elizabeth Perkins"}
        assert ranking[0].average == pytest.approx(4 / 3)
        assert ranking[-1].average == pytest.approx(2.0)

    def test_top_n_limits(self, store, reachable):
        assert len(top_centers(store, reachable, 1)) == 1
        assert len(top_centers(store, reachable, 10)) == 4

    def test_zero_n_is_empty(self, store, reachable):
        assert top_centers(store, reachable, 0) == []

    def test_negative_n_rejected(self, store, reachable):
        with pytest.raises(ValueError):
            top_centers(store, reachable, -1)

    def test_progress_reported(self, store, reachable):
        calls = []
        top_centers(store, reachable, 2, progress=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_isolated_center_cannot_rank(self, store):
        tree = build_tree(store, "Loner")
        with pytest.raises(EmptyReachableSet):
            top_centers(store, ReachableSet(tree, store), 5)

    def test_entries_order_by_average(self):
        entries = [RankingEntry(2.5, "b"), RankingEntry(1.0, "a"), RankingEntry(3.0, "c")]
        assert [e.vertex for e in sorted(entries)] == ["a", "b", "c"]
        assert str(RankingEntry(1.5, "a")) == "1.5000   \ta"


# ---------------------------------------------------------------------------
# Histogram and longest path
# ---------------------------------------------------------------------------


class TestHistogram:
    def test_counts_by_cost(self, tree, reachable):
        histogram = distance_histogram(tree, reachable)
        assert histogram[:3] == [1, 2, 1]
        assert len(histogram) == 10
        assert sum(histogram) == reachable.reachable

    def test_grows_past_initial_buckets(self):
        store = _chain(6)
        tree = build_tree(store, "a0")
        reachable = ReachableSet(tree, store)
        histogram = distance_histogram(tree, reachable, buckets=3)
        assert histogram == [1, 1, 1, 1, 1, 1]

    def test_growth_zero_fills(self):
        store = GraphStore()
        store.insert_vertex("start", actor=True)
        store.insert_vertex("far", actor=True)
        store.insert_edge("start", "far", 12)
        tree = build_tree(store, "start")
        histogram = distance_histogram(tree, ReachableSet(tree, store), buckets=2)
        assert len(histogram) == 13
        assert histogram[0] == 1
        assert histogram[12] == 1
        assert sum(histogram) == 2


class TestLongestPath:
    def test_longest(self, tree, reachable):
        histogram = distance_histogram(tree, reachable)
        path = longest_path(tree, histogram, reachable)
        assert path.cost == 2
        assert path.target == "Elizabeth Perkins"
        assert path.vertices[-1] == "Kevin Bacon (I)"

    def test_cost_matches_highest_bucket(self):
        store = _chain(5)
        tree = build_tree(store, "a0")
        reachable = ReachableSet(tree, store)
        histogram = distance_histogram(tree, reachable)
        highest = max(i for i, count in enumerate(histogram) if count)
        assert longest_path(tree, histogram, reachable).cost == highest == 4

    def test_only_center(self, store):
        tree = build_tree(store, "Loner")
        reachable = ReachableSet(tree, store)
        path = longest_path(tree, distance_histogram(tree, reachable), reachable)
        assert path.cost == 0
        assert path.vertices == ["Loner"]

    def test_empty_histogram(self, tree, reachable):
        assert longest_path(tree, [0, 0, 0], reachable) is None


# ---------------------------------------------------------------------------
# Adjacency queries
# ---------------------------------------------------------------------------


class TestMoviesOf:
    def test_movies(self, store):
        assert movies_of(store, "Kevin Bacon") == ["Footloose", "Apollo 13"]

    def test_single_record(self):
        store, _ = ActorMovieLoader().load_lines(["Kevin Bacon|Wild Things"])
        assert movies_of(store, "Kevin Bacon") == ["Wild Things"]

    def test_unknown(self, store):
        assert movies_of(store, "Nobody") == []


class TestSuggestCenters:
    def test_threshold_and_limit(self, store):
        assert suggest_centers(store, limit=20, min_movies=1) == [
            ("Kevin Bacon (I)", 2), ("Tom Hanks", 2),
        ]
        assert len(suggest_centers(store, limit=1, min_movies=1)) == 1
        assert suggest_centers(store, min_movies=10) == []


# ---------------------------------------------------------------------------
# CenterSession
# ---------------------------------------------------------------------------


class TestCenterSession:
    def test_queries(self, store):
        session = CenterSession(store, "Kevin Bacon")
        assert session.center == "Kevin Bacon (I)"
        assert session.find("Elizabeth Perkins").cost == 2
        assert session.find("Loner") is None
        assert session.average_distance() == pytest.approx(4 / 3)
        assert session.histogram()[:3] == [1, 2, 1]
        assert session.longest_path().cost == 2
        assert session.movies_of("Tom Hanks") == ["Apollo 13", "Big"]

    def test_missing_center(self, store):
        with pytest.raises(VertexNotFound):
            CenterSession(store, "Nobody")

    def test_recenter_invalidates_caches(self, store):
        session = CenterSession(store, "Kevin Bacon")
        reachable = session.reachable
        histogram = session.histogram()
        assert session.reachable is reachable

        assert session.recenter("Lori Singer") == "Lori Singer"
        assert session.reachable is not reachable
        assert session.histogram() is not histogram
        assert session.histogram()[:4] == [1, 1, 1, 1]
        assert session.average_distance() == pytest.approx(2.0)
        assert session.find("Elizabeth Perkins").cost == 3

    def test_failed_recenter_keeps_center(self, store):
        session = CenterSession(store, "Kevin Bacon")
        with pytest.raises(VertexNotFound):
            session.recenter("Nobody")
        assert session.center == "Kevin Bacon (I)"
        assert session.find("Tom Hanks").cost == 1

    def test_ranking_cached_per_reachable_set(self, store):
        session = CenterSession(store, "Kevin Bacon")
        calls = []
        progress = lambda done, total: calls.append(done)  # noqa: E731

        first = session.top_centers(2, progress=progress)
        assert len(calls) == 4
        # same component, so the same reachable set
        session.recenter("Tom Hanks")
        second = session.top_centers(4, progress=progress)
        assert len(calls) == 4
        assert second[:2] == first

    def test_ranking_recomputed_for_other_component(self, store):
        store.insert_vertex("Solo Two", actor=True)
        store.insert_edge("Solo Film", "Solo Two", 1)
        store.insert_edge("Solo Two", "Solo Film", 0)
        session = CenterSession(store, "Kevin Bacon")
        session.top_centers(1)
        session.recenter("Loner")
        ranking = session.top_centers(5)
        assert {e.vertex for e in ranking} == {"Loner", "Solo Two"}

    def test_store_mutation_rebuilds_tree(self, store):
        session = CenterSession(store, "Kevin Bacon")
        assert session.reachable.reachable == 4
        old_tree = session.tree

        ActorMovieLoader().load_lines(["Loner|Footloose"], store=store)
        assert session.tree is not old_tree
        assert session.reachable.reachable == 5
        assert session.find("Loner").cost == 1

    def test_store_mutation_then_recenter_reranks(self):
        store, _ = ActorMovieLoader().load_lines(["A|M1", "B|M1", "B|M2", "C|M2"])
        session = CenterSession(store, "A")
        before = [(e.vertex, e.average) for e in session.top_centers(3)]
        assert before[0] == ("B", pytest.approx(1.0))

        store.insert_edge("M2", "C", 5)
        store.insert_edge("M2", "B", 5)
        session.recenter("B")

        after = [(e.vertex, e.average) for e in session.top_centers(3)]
        fresh = [(e.vertex, e.average) for e in rank_centers(store, session.reachable)]
        assert after == fresh
        assert after == [
            ("B", pytest.approx(3.0)),
            ("A", pytest.approx(3.5)),
            ("C", pytest.approx(5.5)),
        ]

    def test_store_mutation_invalidates_ranking(self):
        store, _ = ActorMovieLoader().load_lines(["A|M1", "B|M1", "B|M2", "C|M2"])
        session = CenterSession(store, "A")
        assert session.top_centers(1)[0].average == pytest.approx(1.0)

        store.insert_edge("M2", "C", 5)
        store.insert_edge("M2", "B", 5)

        best = session.top_centers(1)[0]
        assert (best.vertex, best.average) == ("B", pytest.approx(3.0))

    def test_negative_n_rejected(self, store):
        session = CenterSession(store, "Kevin Bacon")
        with pytest.raises(ValueError):
            session.top_centers(-1)
        assert session.top_centers(0) == []

    def test_removed_center_until_recenter(self, store):
        session = CenterSession(store, "Kevin Bacon")
        store.remove_vertex("Kevin Bacon")
        with pytest.raises(VertexNotFound) as exc:
            session.find("Tom Hanks")
        assert exc.value.key == "Kevin Bacon (I)"

        assert session.recenter("Tom Hanks") == "Tom Hanks"
        assert session.find("Elizabeth Perkins").cost == 1
