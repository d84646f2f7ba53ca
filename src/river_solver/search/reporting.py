"""Console rendering of search traces and results."""

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from river_solver.core.domain import DomainState
from river_solver.search.astar import SearchResult, SearchStatus
from river_solver.search.events import EventKind, NodeSnapshot, SearchEvent

logger = logging.getLogger(__name__)

PATH_SEPARATOR = " -> "


def format_snapshot(snapshot: NodeSnapshot) -> str:
    return f"g={snapshot.cost_to_reach} h={snapshot.heuristic} f={snapshot.f_score}"


def format_path(path: Iterable[DomainState]) -> str:
    """Join display strings with arrows, start first."""
    return PATH_SEPARATOR.join(state.to_display_string() for state in path)


class TraceReporter:
    """Search event observer that writes a step-by-step trace.

    Pass an instance as ``update_callback`` to ``AStarSearcher.search``.
    """

    def __init__(self, stream: Optional[TextIO] = None, show_frontier: bool = True):
        """Initialize reporter.

        Args:
            stream: Output stream (defaults to stdout at call time)
            show_frontier: Print the open set before every expansion
        """
        self.stream = stream
        self.show_frontier = show_frontier
        self.events_seen = 0

    def _write(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def __call__(self, event: SearchEvent) -> None:
        self.events_seen += 1
        for line in self.render(event):
            self._write(line)

    def render(self, event: SearchEvent) -> List[str]:
        """Lines for one event (possibly none)."""
        if event.kind is EventKind.FRONTIER:
            if not self.show_frontier:
                return []
            lines = ["Frontier nodes are:"]
            lines.extend(f"\t{entry.state} h={entry.heuristic} g={entry.cost_to_reach} "
                         f"f={entry.f_score}" for entry in event.frontier)
            return lines

        if event.kind is EventKind.EXPAND:
            return [f"Expand:\t{event.node.state}"]

        if event.kind is EventKind.GENERATE:
            return [f"Generated:\t{event.node.state}\tNew node\t\t{format_snapshot(event.node)}"]

        if event.kind is EventKind.REGENERATE:
            outcome = "Updated F" if event.updated else "No update"
            return [f"Generated:\t{event.node.state}\tRegenerated\t{outcome}\t"
                    f"{format_snapshot(event.node)}"]

        logger.debug(f"Search finished: {event.kind.value}")
        return []


def render_result(result: SearchResult) -> List[str]:
    """Closing lines for a finished search."""
    if result.status is SearchStatus.SOLVED:
        return ["Winning state reached.", format_path(result.path)]
    if result.status is SearchStatus.LIMIT_REACHED:
        return [f"Expansion limit reached after {result.statistics.nodes_expanded} nodes; "
                f"no path found yet."]
    return ["No path to goal!"]


def print_result(result: SearchResult, stream: Optional[TextIO] = None) -> None:
    for line in render_result(result):
        print(line, file=stream or sys.stdout)
