"""Configuration validation for the A* engine."""

import logging
from typing import List
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_benchmark_config(config.get('benchmark', {}))
        validate_logging_config(config.get('logging', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")

    logger.debug("Configuration validation passed")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    bounded_config = search_config.get('bounded', {})
    if bounded_config:
        try_limit = bounded_config.get('try_limit', 10000)
        if not _is_int(try_limit) or try_limit < 0:
            raise ConfigValidationError(
                f"bounded.try_limit must be non-negative integer, got {try_limit}"
            )

        len_max = bounded_config.get('len_max', 1000)
        if not _is_int(len_max) or len_max <= 0:
            raise ConfigValidationError(
                f"bounded.len_max must be positive integer, got {len_max}"
            )

    tracking = search_config.get('statistics_tracking', True)
    if not isinstance(tracking, bool):
        raise ConfigValidationError(
            f"search.statistics_tracking must be boolean, got {tracking}"
        )


def validate_benchmark_config(benchmark_config: DictConfig) -> None:
    """Validate benchmark configuration section."""
    if not benchmark_config:
        return

    iterations = benchmark_config.get('iterations', 20)
    if not _is_int(iterations) or iterations <= 0:
        raise ConfigValidationError(
            f"benchmark.iterations must be positive integer, got {iterations}"
        )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section."""
    if not logging_config:
        return

    level = logging_config.get('level', 'WARNING')
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {', '.join(_LOG_LEVELS)}, got {level}"
        )


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check configuration consistency and return issues.

    Args:
        config: Configuration to check

    Returns:
        List of consistency issues
    """
    issues = []

    bounded = config.get('search', {}).get('bounded', {})
    try_limit = bounded.get('try_limit', 10000)
    len_max = bounded.get('len_max', 1000)

    # Each path node beyond the start costs at least one examination.
    if _is_int(try_limit) and _is_int(len_max) and len_max > try_limit + 1:
        issues.append(
            f"bounded.len_max ({len_max}) exceeds the longest path reachable "
            f"within try_limit ({try_limit})"
        )

    return issues
