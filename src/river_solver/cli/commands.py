"""CLI command implementations."""

import logging
from typing import Any, Dict, List, Optional

import numpy as np
from omegaconf import DictConfig, OmegaConf

from river_solver.config import load_config, validate_config, ConfigValidationError
from river_solver.config.validators import check_config_consistency
from river_solver.puzzles.farmer import RiverState, legal_states, parse_state
from river_solver.search.astar import AStarSearcher, SearchResult, create_astar_searcher
from river_solver.search.bfs import shortest_path_length
from river_solver.search.reporting import TraceReporter, format_path, print_result

from .utils import save_results, format_duration

logger = logging.getLogger(__name__)

UNREACHABLE = -1


def _load(args) -> DictConfig:
    config = load_config(overrides=list(getattr(args, 'config', None) or []))
    for warning in check_config_consistency(config):
        logger.warning(warning)
    return config


def create_searcher(config: DictConfig, args) -> AStarSearcher:
    """Build a searcher from configuration, with command line flags on top."""
    astar_cfg = config.get('search', {}).get('astar', {})

    max_nodes = astar_cfg.get('max_nodes_expanded', None)
    if getattr(args, 'max_nodes', None) is not None:
        max_nodes = args.max_nodes

    skip_parent_state = bool(astar_cfg.get('skip_parent_state', True))
    if getattr(args, 'keep_parent_moves', False):
        skip_parent_state = False

    searcher = create_astar_searcher(
        max_nodes_expanded=max_nodes,
        skip_parent_state=skip_parent_state,
        early_goal_test=bool(astar_cfg.get('early_goal_test', True)),
        record_trace=bool(astar_cfg.get('record_trace', False))
    )
    return searcher


def resolve_start(config: DictConfig, args) -> RiverState:
    """Start state from ``--start`` or from ``puzzle.start``."""
    bits = getattr(args, 'start', None)
    if bits is None:
        bits = str(config.get('puzzle', {}).get('start', '0000'))
    return parse_state(bits)


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code: 0 when a path was found, 1 otherwise
    """
    try:
        config = _load(args)
        start = resolve_start(config, args)
        searcher = create_searcher(config, args)

        reporting_cfg = config.get('reporting', {})
        reporter: Optional[TraceReporter] = None
        if reporting_cfg.get('trace', True) and not args.no_trace and not args.quiet:
            reporter = TraceReporter(show_frontier=bool(reporting_cfg.get('show_frontier', True)))

        logger.info(f"Solving from {start}")
        result = searcher.search(start, update_callback=reporter)

        print_result(result)
        logger.info(describe_solution(result))
        logger.info(f"Search took {format_duration(result.computation_time)}, "
                    f"{result.statistics.nodes_expanded} expanded, "
                    f"{result.statistics.nodes_generated} generated")

        if args.output:
            save_results(_result_payload(start, result), args.output)
            logger.info(f"Results saved to {args.output}")

        return 0 if result.success else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def _result_payload(start: RiverState, result: SearchResult) -> Dict[str, Any]:
    payload = result.to_dict()
    payload['start'] = start.to_bits()
    if result.trace:
        payload['trace'] = [event.to_dict() for event in result.trace]
    return payload


def verify_command(args) -> int:
    """Handle verify command.

    Solves from every legal state and compares the A* path lengths with
    breadth-first shortest path lengths.

    Returns:
        Exit code: 0 when every length matches
    """
    try:
        config = _load(args)
        searcher = create_searcher(config, args)
        searcher.config.record_trace = False
        searcher.config.max_nodes_expanded = None

        starts = legal_states()
        astar_lengths: List[int] = []
        bfs_lengths: List[int] = []
        for start in starts:
            result = searcher.search(start)
            astar_lengths.append(result.moves if result.success else UNREACHABLE)
            expected = shortest_path_length(start)
            bfs_lengths.append(UNREACHABLE if expected is None else expected)

        astar = np.array(astar_lengths)
        bfs = np.array(bfs_lengths)
        mismatches = np.flatnonzero(astar != bfs)

        print(f"{'start':<10}{'bits':<6}{'A*':>4}{'BFS':>5}")
        for start, found, expected in zip(starts, astar, bfs):
            marker = "" if found == expected else "  MISMATCH"
            print(f"{str(start):<10}{start.to_bits():<6}{found:>4}{expected:>5}{marker}")

        reachable = bfs != UNREACHABLE
        print(f"\nChecked {len(starts)} start states, {int(reachable.sum())} can reach the goal")
        if reachable.any():
            print(f"Longest optimal solution: {int(bfs[reachable].max())} moves")

        if args.output:
            save_results({
                'starts': [state.to_bits() for state in starts],
                'astar_lengths': astar,
                'bfs_lengths': bfs,
                'mismatches': [starts[i].to_bits() for i in mismatches]
            }, args.output)

        if mismatches.size:
            for i in mismatches:
                logger.error(f"A* and BFS disagree from {starts[i]}: {astar[i]} vs {bfs[i]}")
            return 1

        print("All A* path lengths match breadth-first search")
        return 0

    except Exception as e:
        logger.error(f"Verify command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=list(args.config or []))
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=list(args.config or []), validate=False)
                validate_config(config)
                print("Configuration is valid")
                for warning in check_config_consistency(config):
                    print(f"Warning: {warning}")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1


def describe_solution(result: SearchResult) -> str:
    """One-line summary used in logs and tests."""
    if not result.success:
        return f"no path ({result.termination_reason})"
    return f"{result.moves} moves: {format_path(result.path)}"
