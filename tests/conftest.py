"""Shared fixtures: a small explicit-graph domain for engine tests."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from river_solver.core.domain import DomainState


class ExplicitGraph:
    """Directed graph given as adjacency lists, heuristic table and goals."""

    def __init__(self, edges: Dict[str, List[str]],
                 heuristics: Optional[Dict[str, int]] = None,
                 goals: Iterable[str] = (),
                 costs: Optional[Dict[Tuple[str, str], int]] = None):
        self.edges = edges
        self.heuristics = heuristics or {}
        self.goals = set(goals)
        self.costs = costs or {}

    def state(self, name: str) -> 'GraphState':
        return GraphState(name, self)


@dataclass(frozen=True, order=True)
class GraphState(DomainState):
    name: str
    graph: ExplicitGraph = field(compare=False, repr=False)

    def is_goal(self) -> bool:
        return self.name in self.graph.goals

    def heuristic(self) -> int:
        return self.graph.heuristics.get(self.name, 0)

    def successors(self) -> List['GraphState']:
        return [GraphState(name, self.graph) for name in self.graph.edges.get(self.name, [])]

    def step_cost(self, successor: DomainState) -> int:
        return self.graph.costs.get((self.name, successor.name), 1)

    def to_display_string(self) -> str:
        return self.name


@pytest.fixture
def make_graph():
    """Factory for explicit-graph domains."""
    return ExplicitGraph


@pytest.fixture
def late_cheaper_expanded_graph():
    """A mid-graph state M is expanded via S-B-C-M before S-A-M is found.

    The cheaper path must correct M (already expanded) and its open child N.
    """
    return ExplicitGraph(
        edges={
            'S': ['A', 'B'],
            'A': ['M'],
            'B': ['C'],
            'C': ['M'],
            'M': ['N'],
            'N': ['G'],
        },
        heuristics={'A': 3},
        goals={'G'},
    )


@pytest.fixture
def late_cheaper_open_graph():
    """M is generated via S-X-Y-M and still open when S-A-M is found."""
    return ExplicitGraph(
        edges={
            'S': ['X', 'A'],
            'X': ['Y'],
            'Y': ['M'],
            'A': ['M'],
            'M': ['G'],
        },
        heuristics={'A': 2, 'M': 1},
        goals={'G'},
    )
