"""Puzzle domains for the A* engine."""

from .farmer import RiverState, parse_state, start_state, goal_state, legal_states

PUZZLES = {
    'farmer_wolf_duck_corn': RiverState,
}

__all__ = [
    'PUZZLES',
    'RiverState',
    'parse_state',
    'start_state',
    'goal_state',
    'legal_states'
]
