"""Search graph nodes and cost revision.

A node wraps one domain state and records the best path found to it so far.
Because the graph is discovered incrementally, a state can first be reached
along a detour. When a cheaper path shows up later, ``relax`` corrects the
node and pushes the improvement down to every node that was generated from
it.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from river_solver.core.domain import DomainState

if TYPE_CHECKING:
    from river_solver.search.frontier import Frontier

logger = logging.getLogger(__name__)


class SearchNode:
    """Vertex of the expanding search graph.

    Nodes compare by identity. Two nodes never wrap equal states within one
    search; the generated table enforces that.
    """

    __slots__ = ('state', 'cost_to_reach', 'heuristic', 'parent', 'children')

    def __init__(self, state: DomainState, parent: Optional['SearchNode'] = None,
                 cost_to_reach: Optional[int] = None):
        """Create a node for ``state``.

        Args:
            state: Domain state wrapped by the node
            parent: Predecessor on the path that generated the state, if any
            cost_to_reach: Path cost from the start. Defaults to 0 for the
                root and to the parent's cost plus the step cost otherwise.
        """
        self.state = state
        self.parent = parent
        if cost_to_reach is None:
            cost_to_reach = 0 if parent is None else parent.cost_to_reach + parent.state.step_cost(state)
        self.cost_to_reach = cost_to_reach
        self.heuristic = state.heuristic()
        self.children: List['SearchNode'] = []

    @property
    def f_score(self) -> int:
        """Estimated total cost f(n) = g(n) + h(n)."""
        return self.cost_to_reach + self.heuristic

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def add_child(self, child: 'SearchNode') -> None:
        """Remember ``child`` for later cost propagation."""
        if not any(existing is child for existing in self.children):
            self.children.append(child)

    def relax(self, new_cost: int, new_parent: 'SearchNode', frontier: 'Frontier') -> bool:
        """Offer a path of cost ``new_cost`` through ``new_parent``.

        If the offer beats the recorded cost, the node adopts the new parent,
        is re-keyed in the frontier when still open, and every child is
        offered the improved cost in turn. Descendants are walked with an
        explicit stack, so the depth of the graph is not bounded by the
        interpreter's recursion limit.

        Args:
            new_cost: Candidate cost to reach this node
            new_parent: Node the candidate path arrives from
            frontier: Open set to re-key the node in

        Returns:
            True if the node was updated
        """
        if new_cost >= self.cost_to_reach:
            return False

        pending = [(self, new_cost, new_parent)]
        while pending:
            node, cost, parent = pending.pop()
            if cost >= node.cost_to_reach:
                continue

            old_priority = node.f_score
            node.cost_to_reach = cost
            node.parent = parent
            if frontier.rekey(node, old_priority, node.f_score):
                logger.debug(f"Re-keyed {node.state} from f={old_priority} to f={node.f_score}")

            # reversed so children are visited in the order they were added
            for child in reversed(node.children):
                pending.append((child, cost + node.state.step_cost(child.state), node))
        return True

    def path(self) -> List[DomainState]:
        """States from the root to this node, in order."""
        states = []
        node = self
        while node is not None:
            states.append(node.state)
            node = node.parent
        return list(reversed(states))

    def release(self) -> None:
        """Drop graph links so the node no longer keeps others alive."""
        self.parent = None
        self.children = []

    def __repr__(self) -> str:
        return (f"SearchNode({self.state}, g={self.cost_to_reach}, "
                f"h={self.heuristic}, f={self.f_score})")
