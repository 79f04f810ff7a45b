"""Configuration management for the A* engine.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import (
    ConfigManager, ConfigContext, DEFAULT_SETTINGS, load_config, get_config, get_parameter
)
from .validators import validate_config, check_config_consistency, ConfigValidationError

__all__ = [
    'ConfigManager',
    'ConfigContext',
    'DEFAULT_SETTINGS',
    'load_config',
    'get_config',
    'get_parameter',
    'validate_config',
    'check_config_consistency',
    'ConfigValidationError'
]
