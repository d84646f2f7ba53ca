"""Tests for trace and result rendering."""

import io

from river_solver.puzzles.farmer import start_state
from river_solver.search.astar import AStarSearcher, SearchConfig, create_astar_searcher
from river_solver.search.events import EventKind, NodeSnapshot, SearchEvent
from river_solver.search.reporting import (
    TraceReporter, format_path, format_snapshot, print_result, render_result
)


def snapshot(state, g, h):
    return NodeSnapshot(state, g, h, g + h)


class TestTraceReporter:
    """Test line rendering for each event kind."""

    def test_frontier_lines(self, make_graph):
        graph = make_graph(edges={})
        event = SearchEvent(EventKind.FRONTIER, frontier=(
            snapshot(graph.state('A'), 1, 2),
            snapshot(graph.state('B'), 2, 2),
        ))

        assert TraceReporter().render(event) == [
            "Frontier nodes are:",
            "\tA h=2 g=1 f=3",
            "\tB h=2 g=2 f=4",
        ]

    def test_frontier_hidden(self, make_graph):
        event = SearchEvent(EventKind.FRONTIER, frontier=(snapshot(make_graph({}).state('A'), 0, 0),))
        assert TraceReporter(show_frontier=False).render(event) == []

    def test_expand_and_generate_lines(self):
        node = snapshot(start_state(), 0, 3)
        reporter = TraceReporter()

        assert reporter.render(SearchEvent(EventKind.EXPAND, node=node)) == ["Expand:\t[||FWDC]"]
        assert reporter.render(SearchEvent(EventKind.GENERATE, node=node)) == [
            "Generated:\t[||FWDC]\tNew node\t\tg=0 h=3 f=3"]

    def test_regenerate_lines(self):
        node = snapshot(start_state(), 2, 3)
        reporter = TraceReporter()

        updated = reporter.render(SearchEvent(EventKind.REGENERATE, node=node, updated=True))
        unchanged = reporter.render(SearchEvent(EventKind.REGENERATE, node=node, updated=False))

        assert updated == ["Generated:\t[||FWDC]\tRegenerated\tUpdated F\tg=2 h=3 f=5"]
        assert unchanged == ["Generated:\t[||FWDC]\tRegenerated\tNo update\tg=2 h=3 f=5"]

    def test_terminal_events_are_silent(self):
        reporter = TraceReporter()
        assert reporter.render(SearchEvent(EventKind.EXHAUSTED)) == []
        assert reporter.render(SearchEvent(EventKind.LIMIT_REACHED)) == []

    def test_full_trace_written_to_stream(self):
        """Test the reporter works as a search callback."""
        stream = io.StringIO()
        reporter = TraceReporter(stream=stream)

        AStarSearcher().search(start_state(), update_callback=reporter)

        output = stream.getvalue().splitlines()
        assert output[0] == "Frontier nodes are:"
        assert output[1] == "\t[||FWDC] h=3 g=0 f=3"
        assert output[2] == "Expand:\t[||FWDC]"
        assert output[3].startswith("Generated:\t[FD||WC]\tNew node")
        assert reporter.events_seen > 0


class TestResultRendering:
    """Test closing lines."""

    def test_solved(self):
        result = AStarSearcher().search(start_state())
        lines = render_result(result)

        assert lines[0] == "Winning state reached."
        assert lines[1].startswith("[||FWDC] -> [FD||WC] -> ")
        assert lines[1].endswith(" -> [FWDC||]")
        assert lines[1].count(" -> ") == 7

    def test_exhausted(self, make_graph):
        result = AStarSearcher().search(make_graph(edges={}).state('S'))
        assert render_result(result) == ["No path to goal!"]

    def test_limit(self):
        result = create_astar_searcher(max_nodes_expanded=2).search(start_state())
        assert render_result(result) == [
            "Expansion limit reached after 2 nodes; no path found yet."]

    def test_print_result(self, make_graph):
        stream = io.StringIO()
        print_result(AStarSearcher(SearchConfig()).search(make_graph({}).state('S')), stream)
        assert stream.getvalue() == "No path to goal!\n"

    def test_format_helpers(self, make_graph):
        graph = make_graph(edges={})
        assert format_path([graph.state('S'), graph.state('G')]) == "S -> G"
        assert format_snapshot(snapshot(graph.state('S'), 1, 2)) == "g=1 h=2 f=3"
