"""Configuration validation for the river-crossing solver."""

import logging
from typing import Any, List
from omegaconf import DictConfig

from river_solver.puzzles import PUZZLES

logger = logging.getLogger(__name__)

KNOWN_PUZZLES = tuple(PUZZLES)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_puzzle_config(config.get('puzzle', {}))
        validate_search_config(config.get('search', {}))
        validate_reporting_config(config.get('reporting', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}") from e

    logger.debug("Configuration validation passed")


def validate_puzzle_config(puzzle_config: DictConfig) -> None:
    """Validate puzzle configuration section."""
    if not puzzle_config:
        return

    name = puzzle_config.get('name', KNOWN_PUZZLES[0])
    if name not in KNOWN_PUZZLES:
        raise ConfigValidationError(
            f"puzzle.name must be one of {list(KNOWN_PUZZLES)}, got {name}"
        )

    start = puzzle_config.get('start', '0000')
    if not isinstance(start, str) or len(start) != 4 or any(c not in '01' for c in start):
        raise ConfigValidationError(
            f"puzzle.start must be a string of four 0/1 digits, got {start!r}"
        )


def normalize_start(start: Any) -> Any:
    """Turn an integer read from ``puzzle.start=1010`` back into a bit string.

    Hydra and YAML parse unquoted digits as integers and drop leading zeros.
    Values that are not made of 0/1 digits are returned unchanged for the
    validator to reject.
    """
    if _is_int(start) and start >= 0:
        digits = str(start)
        if len(digits) <= 4 and set(digits) <= set('01'):
            return digits.zfill(4)
    return start


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section."""
    if not search_config:
        return

    astar_config = search_config.get('astar', {})
    if not astar_config:
        return

    max_nodes = astar_config.get('max_nodes_expanded', None)
    if max_nodes is not None and (not _is_int(max_nodes) or max_nodes <= 0):
        raise ConfigValidationError(
            f"search.astar.max_nodes_expanded must be a positive integer or null, got {max_nodes}"
        )

    for key in ('skip_parent_state', 'early_goal_test', 'record_trace'):
        value = astar_config.get(key, True)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"search.astar.{key} must be a boolean, got {value!r}")


def validate_reporting_config(reporting_config: DictConfig) -> None:
    """Validate reporting configuration section."""
    if not reporting_config:
        return

    for key in ('trace', 'show_frontier'):
        value = reporting_config.get(key, True)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"reporting.{key} must be a boolean, got {value!r}")


def check_config_consistency(config: DictConfig) -> List[str]:
    """Return warnings about settings that are valid but probably unintended."""
    warnings = []

    astar_config = config.get('search', {}).get('astar', {})
    reporting_config = config.get('reporting', {})

    if reporting_config.get('show_frontier', True) and not reporting_config.get('trace', True):
        warnings.append("reporting.show_frontier has no effect while reporting.trace is off")
    if astar_config.get('max_nodes_expanded', None) is not None:
        warnings.append("search.astar.max_nodes_expanded may stop the search before a path is found")

    return warnings


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
