"""Tests for the breadth-first reference search."""

from river_solver.puzzles.farmer import start_state, goal_state, RiverState
from river_solver.search.bfs import breadth_first_search, shortest_path_length


class TestBreadthFirstSearch:
    """Test breadth-first search."""

    def test_classic_puzzle(self):
        path = breadth_first_search(start_state())

        assert path[0] == start_state()
        assert path[-1] == goal_state()
        assert len(path) == 8

    def test_start_is_goal(self):
        assert breadth_first_search(goal_state()) == [goal_state()]
        assert shortest_path_length(goal_state()) == 0

    def test_one_move_from_goal(self):
        """Test ferrying the last item over is one crossing."""
        assert shortest_path_length(RiverState(False, True, False, True)) == 1

    def test_fewest_moves_not_first_found(self, make_graph):
        graph = make_graph(edges={'S': ['A', 'G'], 'A': ['G']}, goals={'G'})
        path = breadth_first_search(graph.state('S'))

        assert [state.name for state in path] == ['S', 'G']

    def test_unreachable(self, make_graph):
        """Test an unreachable goal gives None."""
        graph = make_graph(edges={'S': ['A'], 'A': ['S']}, goals={'G'})

        assert breadth_first_search(graph.state('S')) is None
        assert shortest_path_length(graph.state('S')) is None
