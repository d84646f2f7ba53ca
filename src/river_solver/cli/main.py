"""Main CLI entry point for the river-crossing solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='river-solver',
        description='A* graph search for the Farmer, Wolf, Duck and Corn river crossing',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  river-solver                                  # Solve from the configured start
  river-solver solve --start 1010 --no-trace    # Solve from another state
  river-solver verify                           # Cross-check A* against BFS
  river-solver config show                      # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        default=[],
        help='Configuration override, repeatable (e.g., search.astar.max_nodes_expanded=20)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    # Solve options also apply when no command is given
    parser.set_defaults(start=None, max_nodes=None, no_trace=False, keep_parent_moves=False)

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve the puzzle (default command)',
        description='Run A* from a start state and print the trace and path'
    )
    add_solve_arguments(solve_parser)

    # Verify command
    verify_parser = subparsers.add_parser(
        'verify',
        help='Check A* path lengths against breadth-first search',
        description='Solve from every legal state and compare with BFS shortest paths'
    )
    verify_parser.add_argument(
        '--keep-parent-moves',
        action='store_true',
        help='Also regenerate the parent state during expansion'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')

    return parser


def add_solve_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--start', '-s',
        type=str,
        default=None,
        help='Start state as four 0/1 digits in F W D C order, 1 = far bank (default: from config)'
    )

    parser.add_argument(
        '--max-nodes',
        type=int,
        default=None,
        help='Stop after expanding this many nodes (default: no limit)'
    )

    parser.add_argument(
        '--no-trace',
        action='store_true',
        help='Only print the result, not the step-by-step trace'
    )

    parser.add_argument(
        '--keep-parent-moves',
        action='store_true',
        help='Also regenerate the parent state during expansion'
    )


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error or no path)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        # Running with no command solves the configured puzzle
        if not parsed_args.command:
            parsed_args.command = 'solve'

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'verify':
            return commands.verify_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
