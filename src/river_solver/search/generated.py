"""Table of generated states.

Maps each distinct domain state to the single node created for it. States
reached again along other paths are looked up here instead of getting a
second node.
"""

import logging
from typing import Dict, Iterator

from river_solver.core.domain import DomainState
from river_solver.search.node import SearchNode

logger = logging.getLogger(__name__)


class DuplicateStateError(Exception):
    """Raised when a second node is registered for an already generated state."""
    pass


class GeneratedTable:
    """One node per distinct state for the lifetime of a search."""

    def __init__(self):
        self._nodes: Dict[DomainState, SearchNode] = {}

    def contains(self, state: DomainState) -> bool:
        return state in self._nodes

    def get(self, state: DomainState) -> SearchNode:
        """Return the node for ``state``.

        Raises:
            KeyError: If the state was never generated
        """
        return self._nodes[state]

    def insert(self, state: DomainState, node: SearchNode) -> None:
        """Register ``node`` as the node for ``state``.

        Raises:
            DuplicateStateError: If ``state`` already has a node
        """
        if state in self._nodes:
            raise DuplicateStateError(f"State {state} already has a node")
        self._nodes[state] = node

    def nodes(self) -> Iterator[SearchNode]:
        return iter(self._nodes.values())

    def clear(self) -> None:
        """Tear the whole graph down at once."""
        for node in self._nodes.values():
            node.release()
        self._nodes.clear()

    def __contains__(self, state: DomainState) -> bool:
        return self.contains(state)

    def __len__(self) -> int:
        return len(self._nodes)
