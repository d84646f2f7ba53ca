"""A* graph search with cost revision.

This module implements the search driver. It expands the best open node,
deduplicates successors through the generated table and relaxes already
known states when a cheaper path reaches them, so the path returned is
optimal for any admissible heuristic even when the heuristic is not
consistent.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from river_solver.core.domain import DomainState
from river_solver.search.events import EventKind, NodeSnapshot, SearchEvent
from river_solver.search.frontier import Frontier
from river_solver.search.generated import GeneratedTable
from river_solver.search.node import SearchNode

logger = logging.getLogger(__name__)

EventCallback = Callable[[SearchEvent], None]


class SearchStatus(Enum):
    """Driver state machine."""
    SEARCHING = "searching"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    LIMIT_REACHED = "limit_reached"


@dataclass
class SearchStatistics:
    """Counters collected during one search."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    states_regenerated: int = 0
    relaxations: int = 0
    frontier_rekeys: int = 0
    max_frontier_size: int = 0
    average_branching_factor: float = 0.0
    search_efficiency: float = 0.0  # nodes_expanded / nodes_generated

    def update_branching_factor(self, total_successors: int) -> None:
        """Update average branching factor after an expansion."""
        if self.nodes_expanded > 0:
            self.average_branching_factor = (
                (self.average_branching_factor * (self.nodes_expanded - 1) + total_successors)
                / self.nodes_expanded
            )
        else:
            self.average_branching_factor = total_successors

    def compute_efficiency(self) -> None:
        if self.nodes_generated > 0:
            self.search_efficiency = self.nodes_expanded / self.nodes_generated

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'states_regenerated': self.states_regenerated,
            'relaxations': self.relaxations,
            'frontier_rekeys': self.frontier_rekeys,
            'max_frontier_size': self.max_frontier_size,
            'average_branching_factor': self.average_branching_factor,
            'search_efficiency': self.search_efficiency
        }


@dataclass
class SearchResult:
    """Outcome of one search."""
    status: SearchStatus
    path: List[DomainState] = field(default_factory=list)
    cost: Optional[int] = None
    statistics: SearchStatistics = field(default_factory=SearchStatistics)
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    trace: List[SearchEvent] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is SearchStatus.SOLVED

    @property
    def moves(self) -> int:
        """Number of transitions on the path (0 when no path was found)."""
        return max(len(self.path) - 1, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'status': self.status.value,
            'path': [str(state) for state in self.path],
            'moves': self.moves,
            'cost': self.cost,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'statistics': self.statistics.to_dict()
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    max_nodes_expanded: Optional[int] = None  # None searches until solved or exhausted
    skip_parent_state: bool = True  # do not regenerate the state we came from
    early_goal_test: bool = True  # stop as soon as a goal is generated rather than expanded
    record_trace: bool = False  # keep every event on the result


class AStarSearcher:
    """A* search over a graph of domain states.

    The searcher owns the generated table, the frontier and the node graph of
    the current search. They stay inspectable after ``search`` returns and
    are torn down when the next search starts or ``reset`` is called.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        self.generated = GeneratedTable()
        self.frontier = Frontier()
        self.statistics = SearchStatistics()
        self.status = SearchStatus.SEARCHING
        self.goal_node: Optional[SearchNode] = None
        self._callbacks: List[EventCallback] = []

        logger.info(f"A* searcher initialized with max_nodes={self.config.max_nodes_expanded}, "
                    f"skip_parent_state={self.config.skip_parent_state}")

    def reset(self) -> None:
        """Release the graph of the previous search."""
        self.generated.clear()
        self.frontier = Frontier()
        self.statistics = SearchStatistics()
        self.status = SearchStatus.SEARCHING
        self.goal_node = None

    def _publish(self, event: SearchEvent) -> None:
        for callback in self._callbacks:
            callback(event)

    def _frontier_event(self) -> SearchEvent:
        entries = tuple(NodeSnapshot.of(node) for _, node in self.frontier.entries())
        return SearchEvent(EventKind.FRONTIER, frontier=entries)

    def search(self, start: DomainState,
               update_callback: Optional[EventCallback] = None) -> SearchResult:
        """Search for a cheapest path from ``start`` to a goal state.

        Args:
            start: Initial domain state
            update_callback: Optional observer called with every search event

        Returns:
            SearchResult with the path (empty unless solved) and statistics
        """
        start_time = time.perf_counter()
        self.reset()

        trace: List[SearchEvent] = []
        self._callbacks = []
        if update_callback is not None:
            self._callbacks.append(update_callback)
        if self.config.record_trace:
            self._callbacks.append(trace.append)

        logger.info(f"Starting A* search from {start}")

        root = SearchNode(start)
        self.generated.insert(start, root)
        self.frontier.insert(root.f_score, root)
        self.statistics.nodes_generated = 1
        if start.is_goal():
            self.goal_node = root
            self.status = SearchStatus.SOLVED

        while self.status is SearchStatus.SEARCHING:
            if self.frontier.is_empty():
                self.status = SearchStatus.EXHAUSTED
                break
            if (self.config.max_nodes_expanded is not None and
                    self.statistics.nodes_expanded >= self.config.max_nodes_expanded):
                self.status = SearchStatus.LIMIT_REACHED
                break

            self._publish(self._frontier_event())
            _, node = self.frontier.pop_min()
            if not self.config.early_goal_test and node.state.is_goal():
                self.goal_node = node
                self.status = SearchStatus.SOLVED
                break
            self._expand(node)

        if self.status is SearchStatus.SOLVED:
            self._publish(SearchEvent(EventKind.SOLVED, node=NodeSnapshot.of(self.goal_node)))
        elif self.status is SearchStatus.EXHAUSTED:
            self._publish(SearchEvent(EventKind.EXHAUSTED))
        else:
            self._publish(SearchEvent(EventKind.LIMIT_REACHED))
        self._callbacks = []

        return self._create_result(start_time, trace)

    def _expand(self, node: SearchNode) -> None:
        """Generate, deduplicate and relax the successors of ``node``."""
        self.statistics.nodes_expanded += 1
        self._publish(SearchEvent(EventKind.EXPAND, node=NodeSnapshot.of(node)))

        parent_state = node.parent.state if node.parent is not None else None
        successors = [
            state for state in node.state.successors()
            if state != node.state and not (
                self.config.skip_parent_state and parent_state is not None and state == parent_state)
        ]
        self.statistics.update_branching_factor(len(successors))

        for state in successors:
            step_cost = node.state.step_cost(state)
            if self.generated.contains(state):
                child = self.generated.get(state)
                updated = child.relax(node.cost_to_reach + step_cost, node, self.frontier)
                self.statistics.states_regenerated += 1
                if updated:
                    self.statistics.relaxations += 1
                    logger.debug(f"Cheaper path to {state}: g={child.cost_to_reach}")
                self._publish(SearchEvent(EventKind.REGENERATE, node=NodeSnapshot.of(child),
                                          updated=updated))
            else:
                child = SearchNode(state, parent=node, cost_to_reach=node.cost_to_reach + step_cost)
                self.generated.insert(state, child)
                self.frontier.insert(child.f_score, child)
                self.statistics.nodes_generated += 1
                self._publish(SearchEvent(EventKind.GENERATE, node=NodeSnapshot.of(child)))
                if self.config.early_goal_test and state.is_goal():
                    self.goal_node = child
                    self.status = SearchStatus.SOLVED

            node.add_child(child)
            if self.status is SearchStatus.SOLVED:
                break

    def _create_result(self, start_time: float, trace: List[SearchEvent]) -> SearchResult:
        self.statistics.frontier_rekeys = self.frontier.rekey_count
        self.statistics.max_frontier_size = self.frontier.max_size
        self.statistics.compute_efficiency()
        computation_time = time.perf_counter() - start_time

        if self.status is SearchStatus.SOLVED:
            path = self.goal_node.path()
            logger.info(f"Goal reached in {len(path) - 1} moves after "
                        f"{self.statistics.nodes_expanded} expansions")
            return SearchResult(
                status=self.status,
                path=path,
                cost=self.goal_node.cost_to_reach,
                statistics=self.statistics,
                computation_time=computation_time,
                termination_reason="goal_reached",
                trace=trace
            )

        reason = "search_exhausted" if self.status is SearchStatus.EXHAUSTED else "max_nodes_reached"
        logger.info(f"Search stopped without a path: {reason}")
        return SearchResult(
            status=self.status,
            statistics=self.statistics,
            computation_time=computation_time,
            termination_reason=reason,
            trace=trace
        )

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the last search."""
        return {
            'status': self.status.value,
            'generated_states': len(self.generated),
            'open_nodes': len(self.frontier),
            'statistics': self.statistics.to_dict(),
            'config': {
                'max_nodes_expanded': self.config.max_nodes_expanded,
                'skip_parent_state': self.config.skip_parent_state,
                'early_goal_test': self.config.early_goal_test,
                'record_trace': self.config.record_trace
            }
        }


def create_astar_searcher(max_nodes_expanded: Optional[int] = None,
                          skip_parent_state: bool = True,
                          early_goal_test: bool = True,
                          record_trace: bool = False) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        max_nodes_expanded: Stop after this many expansions (None for no limit)
        skip_parent_state: Skip successors equal to the expanding node's parent
        early_goal_test: Stop when a goal is generated instead of when it is expanded
        record_trace: Keep every search event on the result

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        max_nodes_expanded=max_nodes_expanded,
        skip_parent_state=skip_parent_state,
        early_goal_test=early_goal_test,
        record_trace=record_trace
    )

    return AStarSearcher(config)
