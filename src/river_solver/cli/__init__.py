"""Command-line interface for the river-crossing solver.

This module provides CLI commands for solving the puzzle, cross-checking the
search against breadth-first search and inspecting configuration.
"""

from .main import main_cli, main
from .commands import solve_command, verify_command, config_command
from .utils import setup_logging, save_results

__all__ = [
    'main_cli',
    'main',
    'solve_command',
    'verify_command',
    'config_command',
    'setup_logging',
    'save_results'
]
