"""Open set for A* search.

An indexed binary heap: ``heapq`` holds ``[priority, sequence, node]``
entries and a node-identity index points at each node's live entry, so a
node can be re-keyed without scanning. Re-keyed entries are invalidated in
place and skipped when they surface.

Ties on priority pop in insertion order. A re-keyed node counts as freshly
inserted.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Tuple

from river_solver.search.node import SearchNode

logger = logging.getLogger(__name__)

_REMOVED = None


class FrontierError(Exception):
    """Raised when the frontier is used against its contract."""
    pass


class EmptyFrontierError(FrontierError, IndexError):
    """Raised when popping or peeking an empty frontier."""
    pass


class Frontier:
    """Priority queue of open nodes keyed by estimated total cost."""

    def __init__(self):
        self._heap: List[list] = []
        self._index: Dict[SearchNode, list] = {}
        self._counter = itertools.count()
        self.rekey_count = 0
        self.max_size = 0

    def insert(self, priority: int, node: SearchNode) -> None:
        """Add ``node`` with the given priority.

        Raises:
            FrontierError: If the node is already open
        """
        if node in self._index:
            raise FrontierError(f"Node for {node.state} is already in the frontier")
        self._push(priority, node)
        self.max_size = max(self.max_size, len(self._index))

    def _push(self, priority: int, node: SearchNode) -> None:
        entry = [priority, next(self._counter), node]
        self._index[node] = entry
        heapq.heappush(self._heap, entry)

    def _discard_stale(self) -> None:
        while self._heap and self._heap[0][2] is _REMOVED:
            heapq.heappop(self._heap)

    def peek_min(self) -> Tuple[int, SearchNode]:
        """Return the lowest-priority entry without removing it."""
        self._discard_stale()
        if not self._heap:
            raise EmptyFrontierError("peek on an empty frontier")
        priority, _, node = self._heap[0]
        return priority, node

    def pop_min(self) -> Tuple[int, SearchNode]:
        """Remove and return the lowest-priority entry."""
        self._discard_stale()
        if not self._heap:
            raise EmptyFrontierError("pop from an empty frontier")
        priority, _, node = heapq.heappop(self._heap)
        del self._index[node]
        return priority, node

    def rekey(self, node: SearchNode, old_priority: Optional[int], new_priority: int) -> bool:
        """Move ``node`` from ``old_priority`` to ``new_priority``.

        Args:
            node: Node to re-key, matched by identity
            old_priority: Priority the caller believes the node has, or None
                to skip the check
            new_priority: New priority

        Returns:
            False if the node is not in the frontier (already expanded)

        Raises:
            FrontierError: If ``old_priority`` does not match the recorded one
        """
        entry = self._index.get(node)
        if entry is None:
            return False
        if old_priority is not None and entry[0] != old_priority:
            raise FrontierError(
                f"Node for {node.state} is recorded at f={entry[0]}, not f={old_priority}"
            )

        entry[2] = _REMOVED
        self._push(new_priority, node)
        self.rekey_count += 1
        return True

    def priority_of(self, node: SearchNode) -> Optional[int]:
        """Recorded priority of ``node``, or None if it is not open."""
        entry = self._index.get(node)
        return None if entry is None else entry[0]

    def entries(self) -> List[Tuple[int, SearchNode]]:
        """Snapshot of the open entries in the order they would pop."""
        live = sorted((entry[0], entry[1], entry[2]) for entry in self._index.values())
        return [(priority, node) for priority, _, node in live]

    def is_empty(self) -> bool:
        return not self._index

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node: SearchNode) -> bool:
        return node in self._index
