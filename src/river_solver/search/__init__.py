"""Search algorithms for the river-crossing solver.

This module implements graph A* with cost revision, its supporting data
structures, and a breadth-first reference search.
"""

from .node import SearchNode
from .frontier import Frontier, FrontierError, EmptyFrontierError
from .generated import GeneratedTable, DuplicateStateError
from .events import EventKind, NodeSnapshot, SearchEvent
from .astar import (
    AStarSearcher, SearchConfig, SearchResult, SearchStatistics, SearchStatus,
    create_astar_searcher
)
from .bfs import breadth_first_search, shortest_path_length

__all__ = [
    'SearchNode',
    'Frontier',
    'FrontierError',
    'EmptyFrontierError',
    'GeneratedTable',
    'DuplicateStateError',
    'EventKind',
    'NodeSnapshot',
    'SearchEvent',
    'AStarSearcher',
    'SearchConfig',
    'SearchResult',
    'SearchStatistics',
    'SearchStatus',
    'create_astar_searcher',
    'breadth_first_search',
    'shortest_path_length'
]
