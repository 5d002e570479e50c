"""Bacon CLI — load an actor/movie list and query Bacon numbers interactively.

Usage:
    bacon imdb.small.txt                       # center on Kevin Bacon
    bacon imdb.top250.txt "Tom Hanks"          # center on someone else
    bacon http://example.org/imdb.pre1950.txt  # stream from a URL

Then, at the prompt:
    find <name>       path and Bacon number from the center to <name>
    recenter <name>   make <name> the new center
    avgdist           average Bacon number from the center
    topcenter [n]     the n best centers of the center's component
    table             counts of each Bacon number
    movies <name>     everything <name> appeared in
    longest           one of the longest shortest paths
    help / exit
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, TextIO

from tqdm import tqdm

from bacon.config.settings import settings
from bacon.graph.analytics import suggest_centers
from bacon.graph.errors import EmptyReachableSet, VertexNotFound
from bacon.graph.loader import ActorMovieLoader, expected_records
from bacon.graph.paths import PathResult
from bacon.graph.session import CenterSession
from bacon.graph.store import GraphStore

logger = logging.getLogger(__name__)

PROMPT = "Please enter command: "

HELP_ROWS = [
    ("find <name>", "finds the shortest path from center to name."),
    ("recenter <name>", "recenters to the given name."),
    ("avgdist", "finds the average bacon number w/respect to the center."),
    ("topcenter <n>", "finds the top n centers for the graph,"),
    ("", "i.e. the n actors with the shortest average bacon number."),
    ("table", "prints a table of the counts of bacon numbers"),
    ("", "for the given center from 0 up to the longest."),
    ("movies <name>", "prints a list of all movies <name> was in"),
    ("longest", "prints one path of longest possible length in the graph"),
    ("exit", "leaves the program."),
]


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="bacon",
        description="Bacon numbers over an actor/movie graph",
    )
    parser.add_argument("source", help="Path or http(s) URL of a name|title list")
    parser.add_argument(
        "center", nargs="?", default=settings.DEFAULT_CENTER,
        help=f"Initial center (default: {settings.DEFAULT_CENTER})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )
    parser.add_argument(
        "--suffix", default=settings.VERTEX_SUFFIX,
        help="Suffix tried when a name is not found as typed",
    )
    parser.add_argument(
        "--top", type=int, default=settings.TOP_CENTERS_DEFAULT,
        help="Default n for topcenter",
    )

    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        store = _load(args.source, args.suffix)
        session = _open_session(store, args.center, sys.stdin)
        if session is None:
            sys.exit(1)
        BaconShell(session, top_default=args.top).run(sys.stdin)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)
    except Exception as exc:
        logger.error("Error: %s", exc)
        if args.verbose:
            raise
        sys.exit(1)


# ---------------------------------------------------------------------------
# Start-up
# ---------------------------------------------------------------------------


def _load(source: str, suffix: str) -> GraphStore:
    loader = ActorMovieLoader(suffix=suffix, timeout=settings.HTTP_TIMEOUT)
    with tqdm(total=expected_records(source), desc="Loading", unit=" records", file=sys.stderr) as bar:
        store, stats = loader.load(source, progress=lambda *_: bar.update(1))
    print(f"Successfully logged {stats.records} entries.")
    if stats.skipped_lines:
        print(f"Skipped {stats.skipped_lines} malformed line(s).")
    return store


def _open_session(store: GraphStore, center: str, stdin: TextIO) -> CenterSession | None:
    """Build the first tree, asking for another center while the name is unknown."""
    while store.resolve(center) is None:
        print(f'Vertex "{center}" is not in the graph. Please enter a name from the following: ')
        for name, count in suggest_centers(store, settings.SUGGEST_LIMIT, settings.SUGGEST_MIN_MOVIES):
            print(f"{name} || {count}")
        print("Enter a new center: ", end="", flush=True)
        line = stdin.readline()
        if not line:
            return None
        center = line.strip()

    print("Creating shortest-path tree using Dijkstra's algorithm...")
    session = CenterSession(store, center, histogram_buckets=settings.HISTOGRAM_BUCKETS)
    print(f"{session.center}, {len(session.movies_of(session.center))}")
    return session


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_path(path: PathResult) -> str:
    """``name -> movie -> ... -> center (cost)``"""
    return " -> ".join(path.vertices) + f" ({path.cost})"


def format_table(histogram: list[int], unreachable: int) -> list[str]:
    rows = [
        f"{'Number ' + str(i):<10} : {count:>10}"
        for i, count in enumerate(histogram)
        if count
    ]
    if unreachable:
        rows.append(f"{'Unreachable':>11}: {unreachable:>10}")
    return rows


# ---------------------------------------------------------------------------
# Command loop
# ---------------------------------------------------------------------------


class BaconShell:
    """Read-eval loop over a ``CenterSession``.

    ``handle`` runs one command line and returns False once the user asks
    to exit. Recoverable graph errors are reported, not raised.
    """

    def __init__(self, session: CenterSession, top_default: int = 5) -> None:
        self._session = session
        self._top_default = top_default
        self._commands: dict[str, Callable[[str], None]] = {
            "find": self._cmd_find,
            "recenter": self._cmd_recenter,
            "avgdist": self._cmd_avgdist,
            "topcenter": self._cmd_topcenter,
            "table": self._cmd_table,
            "movies": self._cmd_movies,
            "longest": self._cmd_longest,
            "help": self._cmd_help,
        }

    @property
    def session(self) -> CenterSession:
        return self._session

    def run(self, stdin: TextIO) -> None:
        print()
        print("Welcome to Kevin Bacon! Kevin Bacon welcomes you.")
        print('Enter "help" for a list of commands or "exit" to exit the system.')
        print(PROMPT, end="", flush=True)
        for line in stdin:
            if not self.handle(line):
                return
            print(PROMPT, end="", flush=True)

    def handle(self, line: str) -> bool:
        command, _, rest = line.strip().partition(" ")
        command = command.lower()
        argument = " ".join(rest.split())
        if not command:
            return True
        if command == "exit":
            return False

        handler = self._commands.get(command)
        if handler is None:
            print('Not a valid command. Enter "help" for a list of valid commands.')
            return True

        try:
            handler(argument)
        except EmptyReachableSet as exc:
            print(f'No actors are reachable from "{exc.center}".')
        except VertexNotFound as exc:
            print(f'Vertex "{exc.key}" does not exist in the graph.')
        print()
        return True

    # -- Commands ------------------------------------------------------------

    def _cmd_find(self, name: str) -> None:
        if not name:
            print("Usage: find <name>")
            return
        path = self._session.find(name)
        if path is None:
            print(f"{name} is unreachable")
        else:
            print(format_path(path))

    def _cmd_recenter(self, name: str) -> None:
        if not name:
            print("Usage: recenter <name>")
            return
        print(f'Recentering to "{name}" ...')
        self._session.recenter(name)

    def _cmd_avgdist(self, _: str) -> None:
        avg = self._session.average_distance()
        reachable = self._session.reachable
        print(
            f"{avg:.4f}\t{self._session.center}\t"
            f"( {reachable.reachable}, {reachable.unreachable} )"
        )

    def _cmd_topcenter(self, argument: str) -> None:
        n = self._top_default
        if argument:
            try:
                n = int(argument.split()[0])
            except ValueError:
                n = 0
            if n < 1:
                print("Usage: topcenter <n>")
                return

        total = self._session.reachable.reachable
        with tqdm(total=total, desc="Processing actors", file=sys.stderr, leave=False) as bar:
            entries = self._session.top_centers(n, progress=lambda *_: bar.update(1))
        for entry in entries:
            print(entry)

    def _cmd_table(self, _: str) -> None:
        histogram = self._session.histogram()
        print(f"Table for: {self._session.center}")
        for row in format_table(histogram, self._session.reachable.unreachable):
            print(row)

    def _cmd_movies(self, name: str) -> None:
        if not name:
            print("Usage: movies <name>")
            return
        print(f"{name} has been in:")
        movies = self._session.movies_of(name)
        if not movies:
            print("No movies in this database :(")
        for title in movies:
            print(title)

    def _cmd_longest(self, _: str) -> None:
        path = self._session.longest_path()
        if path is not None:
            print(format_path(path))

    def _cmd_help(self, _: str) -> None:
        print(f"{'(Command)':<15} : (Function)")
        for command, description in HELP_ROWS:
            if command:
                print(f"{command:<15} : {description}")
            else:
                print(f"{'':<18}{description}")


if __name__ == "__main__":
    main()
