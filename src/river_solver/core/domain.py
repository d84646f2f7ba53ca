"""Domain model contract for the A* search engine.

The engine never looks inside a state. Everything it needs is expressed as a
small capability set on the state object itself: goal test, heuristic
estimate, successor generation and step cost. States must also be hashable,
comparable for equality and totally ordered so they can key the generated
table and give deterministic output.
"""

from abc import ABC, abstractmethod
from typing import Sequence


class DomainState(ABC):
    """Abstract base class for puzzle states searched by the engine.

    Concrete states are expected to be immutable value objects (a frozen,
    ordered dataclass is the usual choice).
    """

    @abstractmethod
    def is_goal(self) -> bool:
        """Return True if this state satisfies the goal predicate."""
        pass

    @abstractmethod
    def heuristic(self) -> int:
        """Estimate the remaining cost to a goal.

        Returns:
            Non-negative estimate that never exceeds the true remaining cost
        """
        pass

    @abstractmethod
    def successors(self) -> Sequence['DomainState']:
        """Return every state reachable with a single legal move.

        The order only affects tie-breaking in the frontier.
        """
        pass

    def step_cost(self, successor: 'DomainState') -> int:
        """Cost of the move from this state to ``successor``.

        Moves are uniform by default. Domains with weighted moves override
        this; costs must stay strictly positive.
        """
        return 1

    @abstractmethod
    def to_display_string(self) -> str:
        """Human-readable rendering used only for reporting."""
        pass

    def __str__(self) -> str:
        return self.to_display_string()
