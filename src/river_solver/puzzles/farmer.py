"""Farmer, Wolf, Duck and Corn river-crossing puzzle.

The farmer has to ferry a wolf, a duck and a sack of corn across a river.
The boat holds the farmer and at most one item. Left alone, the wolf eats
the duck and the duck eats the corn.

Each position is a flag telling whether that participant already stands on
the far (goal) bank.
"""

import itertools
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from river_solver.core.domain import DomainState

logger = logging.getLogger(__name__)

PARTICIPANTS: Tuple[str, ...] = ('farmer', 'wolf', 'duck', 'corn')
CARGO: Tuple[str, ...] = ('wolf', 'duck', 'corn')
LETTERS = {'farmer': 'F', 'wolf': 'W', 'duck': 'D', 'corn': 'C'}


@dataclass(frozen=True, order=True)
class RiverState(DomainState):
    """Positions of the four participants. ``True`` means far bank."""
    farmer: bool = False
    wolf: bool = False
    duck: bool = False
    corn: bool = False

    def is_safe(self) -> bool:
        """Check that nothing gets eaten on the bank without the farmer."""
        if self.wolf == self.duck != self.farmer:
            return False
        if self.duck == self.corn != self.farmer:
            return False
        return True

    def is_goal(self) -> bool:
        return self.farmer and self.wolf and self.duck and self.corn

    def heuristic(self) -> int:
        # One crossing moves at most one item, so counting the items still
        # on the near bank never overestimates.
        return sum(1 for name in CARGO if not getattr(self, name))

    def can_carry(self, item: str) -> bool:
        """Return True if ``item`` is on the farmer's bank."""
        return getattr(self, item) == self.farmer

    def cross(self, item: Optional[str] = None) -> 'RiverState':
        """Move the farmer to the other bank, optionally with one item."""
        changes = {'farmer': not self.farmer}
        if item is not None:
            if not self.can_carry(item):
                raise ValueError(f"The {item} is not on the farmer's bank")
            changes[item] = not getattr(self, item)
        return replace(self, **changes)

    def successors(self) -> List['RiverState']:
        moves = [self.cross(item) for item in CARGO if self.can_carry(item)]
        moves.append(self.cross())
        return [state for state in moves if state.is_safe()]

    def bank(self, far: bool) -> str:
        return ''.join(LETTERS[name] for name in PARTICIPANTS
                       if getattr(self, name) == far)

    def to_display_string(self) -> str:
        return f"[{self.bank(True)}||{self.bank(False)}]"

    def to_bits(self) -> str:
        """Compact ``FWDC`` bit string, e.g. ``'0000'`` for the start."""
        return ''.join('1' if getattr(self, name) else '0' for name in PARTICIPANTS)


def parse_state(bits: str) -> RiverState:
    """Parse a four character ``0``/``1`` string in F, W, D, C order.

    Raises:
        ValueError: If the string is malformed or describes an unsafe state
    """
    bits = bits.strip()
    if len(bits) != len(PARTICIPANTS) or any(c not in '01' for c in bits):
        raise ValueError(f"State must be four 0/1 digits in FWDC order, got {bits!r}")

    state = RiverState(*(c == '1' for c in bits))
    if not state.is_safe():
        raise ValueError(f"Unsafe start state {state}: something would be eaten")
    return state


def start_state() -> RiverState:
    """Everyone waiting on the near bank."""
    return RiverState()


def goal_state() -> RiverState:
    return RiverState(True, True, True, True)


def all_states() -> List[RiverState]:
    """Every assignment of banks, safe or not, in sorted order."""
    return [RiverState(*flags) for flags in itertools.product((False, True), repeat=4)]


def legal_states() -> List[RiverState]:
    states = [state for state in all_states() if state.is_safe()]
    logger.debug(f"{len(states)} of 16 bank assignments are safe")
    return states
