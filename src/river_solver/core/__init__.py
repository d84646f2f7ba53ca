"""Core domain abstractions shared by the search engine and the puzzles."""

from .domain import DomainState

__all__ = [
    'DomainState'
]
