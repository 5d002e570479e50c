"""Actor/movie records -> ``GraphStore``.

Input is one record per line, ``name|title``. Each record becomes:

  - an actor vertex ``name`` and a movie vertex ``title``
  - an edge ``name -> title`` costing 0
  - an edge ``title -> name`` costing 1

so walking actor -> movie -> actor costs exactly one per movie, and the
cost of any path between two actors is the number of movies on it.

Sources can be local files or ``http(s)`` URLs (streamed with httpx).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

import httpx

from bacon.graph.store import DEFAULT_SUFFIX, GraphStore

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
ACTOR_TO_MOVIE_COST = 0
MOVIE_TO_ACTOR_COST = 1

LoadProgress = Callable[[int, "int | None"], None]

# Line counts of the well-known IMDb extracts, used as the progress total
# when the source name mentions one. First match wins.
KNOWN_DATASET_SIZES: list[tuple[str, int]] = [
    ("small", 1817),
    ("top250", 14339),
    ("pre1950", 1014465),
    ("post1950", 8159857),
    ("only-tv-v", 2302907),
    ("no-tv-v", 6871415),
    ("full", 9174322),
]


def expected_records(source: str) -> int | None:
    """Known record count for a dataset name, or None."""
    for marker, count in KNOWN_DATASET_SIZES:
        if marker in source:
            return count
    return None


def parse_record(line: str) -> tuple[str, str] | None:
    """Split ``name|title``; None unless there are exactly two non-empty fields."""
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(fields) != 2:
        return None
    name, title = fields
    if not name or not title:
        return None
    return name, title


@dataclass
class LoadStats:
    """Statistics from a load."""

    records: int = 0
    skipped_lines: int = 0
    actors: int = 0
    movies: int = 0
    edges: int = 0


class ActorMovieLoader:
    """Build a ``GraphStore`` from ``name|title`` records.

    Parameters
    ----------
    suffix:
        Disambiguation suffix for stores this loader creates.
    timeout:
        HTTP timeout in seconds for URL sources.
    client:
        Optional ``httpx.Client`` for URL sources. A short-lived client is
        created per load otherwise.
    """

    def __init__(
        self,
        suffix: str = DEFAULT_SUFFIX,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._suffix = suffix
        self._timeout = timeout
        self._client = client

    def load_lines(
        self,
        lines: Iterable[str],
        store: GraphStore | None = None,
        total: int | None = None,
        progress: LoadProgress | None = None,
    ) -> tuple[GraphStore, LoadStats]:
        """Insert every record in ``lines`` into ``store`` (a new one by default)."""
        if store is None:
            store = GraphStore(suffix=self._suffix)
        stats = LoadStats()
        vertices_before = store.vertex_count
        actors_before = store.actor_count
        edges_before = store.edge_count

        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            record = parse_record(line)
            if record is None:
                stats.skipped_lines += 1
                logger.debug("Skipping malformed line %d: %r", lineno, line)
                continue
            name, title = record
            store.insert_vertex(name, actor=True)
            store.insert_vertex(title)
            store.insert_edge(name, title, ACTOR_TO_MOVIE_COST)
            store.insert_edge(title, name, MOVIE_TO_ACTOR_COST)
            stats.records += 1
            if progress is not None:
                progress(stats.records, total)

        stats.actors = store.actor_count - actors_before
        stats.movies = (store.vertex_count - vertices_before) - stats.actors
        stats.edges = store.edge_count - edges_before

        logger.info(
            "Loaded %d records: %d actors, %d movies, %d edges (%d malformed lines skipped)",
            stats.records, stats.actors, stats.movies, stats.edges, stats.skipped_lines,
        )
        return store, stats

    def load(
        self,
        source: str | Path,
        progress: LoadProgress | None = None,
    ) -> tuple[GraphStore, LoadStats]:
        """Load a file path or an ``http(s)`` URL into a fresh store."""
        source = str(source)
        total = expected_records(source)
        if source.startswith(("http://", "https://")):
            return self._load_url(source, total, progress)

        with open(source, encoding="utf-8", errors="replace") as fh:
            return self.load_lines(fh, total=total, progress=progress)

    def _load_url(
        self,
        url: str,
        total: int | None,
        progress: LoadProgress | None,
    ) -> tuple[GraphStore, LoadStats]:
        client = self._client or httpx.Client(timeout=self._timeout, follow_redirects=True)
        try:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                logger.info("Streaming records from %s", url)
                return self.load_lines(response.iter_lines(), total=total, progress=progress)
        finally:
            if self._client is None:
                client.close()
