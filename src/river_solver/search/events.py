"""Observable trace of an A* search.

The driver does no I/O. Instead it publishes one ``SearchEvent`` per step to
an optional callback. Events carry value snapshots (state, g, h, f) taken at
publication time, so a consumer sees the numbers as they were even after
later relaxations change the nodes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from river_solver.core.domain import DomainState
from river_solver.search.node import SearchNode


class EventKind(Enum):
    """Kinds of step the driver reports."""
    FRONTIER = "frontier"      # open set before choosing a node
    EXPAND = "expand"          # node removed from the frontier for expansion
    GENERATE = "generate"      # successor seen for the first time
    REGENERATE = "regenerate"  # successor already known, relaxation offered
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    LIMIT_REACHED = "limit_reached"


@dataclass(frozen=True)
class NodeSnapshot:
    """Values of a node at one point of the search."""
    state: DomainState
    cost_to_reach: int
    heuristic: int
    f_score: int

    @classmethod
    def of(cls, node: SearchNode) -> 'NodeSnapshot':
        return cls(node.state, node.cost_to_reach, node.heuristic, node.f_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'state': str(self.state),
            'g': self.cost_to_reach,
            'h': self.heuristic,
            'f': self.f_score
        }


@dataclass(frozen=True)
class SearchEvent:
    """One step of the search trace.

    ``node`` is set for every kind except ``FRONTIER`` and ``EXHAUSTED``.
    ``frontier`` is set for ``FRONTIER`` events and lists the open entries
    in pop order. ``updated`` is set for ``REGENERATE`` events.
    """
    kind: EventKind
    node: Optional[NodeSnapshot] = None
    frontier: Tuple[NodeSnapshot, ...] = field(default_factory=tuple)
    updated: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'kind': self.kind.value}
        if self.node is not None:
            payload['node'] = self.node.to_dict()
        if self.kind is EventKind.FRONTIER:
            payload['frontier'] = [entry.to_dict() for entry in self.frontier]
        if self.updated is not None:
            payload['updated'] = self.updated
        return payload
