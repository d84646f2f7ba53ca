"""Uninformed breadth-first search.

Used as a brute-force reference to check that A* returns shortest paths on
small, unit-cost state spaces.
"""

import logging
from collections import deque
from typing import Dict, List, Optional

from river_solver.core.domain import DomainState

logger = logging.getLogger(__name__)


def breadth_first_search(start: DomainState) -> Optional[List[DomainState]]:
    """Find a path with the fewest moves from ``start`` to a goal.

    Args:
        start: Initial state

    Returns:
        States from ``start`` to the goal, or None if no goal is reachable
    """
    if start.is_goal():
        return [start]

    parents: Dict[DomainState, Optional[DomainState]] = {start: None}
    queue = deque([start])

    while queue:
        state = queue.popleft()
        for next_state in state.successors():
            if next_state in parents:
                continue
            parents[next_state] = state
            if next_state.is_goal():
                return _unwind(parents, next_state)
            queue.append(next_state)

    logger.debug(f"No goal reachable from {start} ({len(parents)} states visited)")
    return None


def _unwind(parents: Dict[DomainState, Optional[DomainState]], goal: DomainState) -> List[DomainState]:
    path = []
    state: Optional[DomainState] = goal
    while state is not None:
        path.append(state)
        state = parents[state]
    return list(reversed(path))


def shortest_path_length(start: DomainState) -> Optional[int]:
    """Number of moves on a shortest path, or None if the goal is unreachable."""
    path = breadth_first_search(start)
    return None if path is None else len(path) - 1
