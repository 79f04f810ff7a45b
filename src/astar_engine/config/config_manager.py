"""Hydra-backed settings for the search engine and its command line.

Settings are composed from ``conf/config.yaml`` at the project root. An
installed copy has no ``conf/`` directory, so a manager created without an
explicit directory falls back to ``DEFAULT_SETTINGS``; dotted overrides
apply in both cases.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf, open_dict

from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "conf"

DEFAULT_SETTINGS: Dict[str, Any] = {
    'search': {
        'bounded': {'try_limit': 10000, 'len_max': 1000},
        'statistics_tracking': True,
    },
    'benchmark': {'iterations': 20},
    'logging': {'level': 'WARNING'},
}

# Configuration most recently loaded by any manager
_global_config: Optional[DictConfig] = None


class ConfigManager:
    """Loads, queries and edits one search configuration.

    Args:
        config_dir: Directory holding ``<config_name>.yaml``. When None the
            project's ``conf/`` is used if present, otherwise the built-in
            defaults.

    Raises:
        FileNotFoundError: If an explicit ``config_dir`` does not exist
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        if config_dir is None:
            self.config_dir = DEFAULT_CONFIG_DIR if DEFAULT_CONFIG_DIR.is_dir() else None
        else:
            self.config_dir = Path(config_dir).resolve()
            if not self.config_dir.is_dir():
                raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        self.config: Optional[DictConfig] = None
        logger.debug(f"Config manager using {self.config_dir or 'built-in defaults'}")

    @property
    def uses_defaults(self) -> bool:
        return self.config_dir is None

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the configuration and make it the global one.

        Args:
            config_name: Config file name without ``.yaml``
            overrides: Dotted ``key=value`` overrides
            validate: Run ``validate_config`` on the result

        Returns:
            The loaded configuration

        Raises:
            ConfigValidationError: If validation is on and a value is invalid
        """
        global _global_config

        overrides = list(overrides or [])
        if self.uses_defaults:
            cfg = self._from_defaults(overrides)
        else:
            cfg = self._compose(config_name, overrides)

        if validate:
            validate_config(cfg)

        self.config = cfg
        _global_config = cfg
        logger.info(f"Configuration loaded ({config_name}, overrides={overrides})")
        return cfg

    def _compose(self, config_name: str, overrides: List[str]) -> DictConfig:
        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            return compose(config_name=config_name, overrides=overrides)

    @staticmethod
    def _from_defaults(overrides: List[str]) -> DictConfig:
        logger.warning("No conf/ directory found; using built-in defaults")
        return OmegaConf.merge(OmegaConf.create(DEFAULT_SETTINGS),
                               OmegaConf.from_dotlist(overrides))

    def _loaded(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def get_config(self) -> Optional[DictConfig]:
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``search.bounded.try_limit``."""
        return OmegaConf.select(self._loaded(), key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Set a dotted key, creating missing sections."""
        cfg = self._loaded()
        with open_dict(cfg):
            OmegaConf.update(cfg, key, value, merge=False)
        logger.debug(f"Parameter set: {key} = {value}")

    def update_config(self, updates: Dict[str, Any], validate: bool = True) -> None:
        """Set several dotted keys, then re-validate.

        Raises:
            ConfigValidationError: If validation is on and a value is invalid
        """
        cfg = self._loaded()
        for key, value in updates.items():
            self.set_parameter(key, value)
        if validate:
            validate_config(cfg)
        if updates:
            logger.info(f"Configuration updated with: {updates}")

    def save_config(self, output_path: Union[str, Path]) -> None:
        cfg = self._loaded()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(cfg, output_path)
        logger.info(f"Configuration saved to: {output_path}")

    def print_config(self, resolve: bool = True) -> None:
        if self.config is None:
            print("No configuration loaded.")
            return

        print("Current Configuration:")
        print("=" * 50)
        print(OmegaConf.to_yaml(self.config, resolve=resolve))


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load a configuration through a fresh ``ConfigManager``."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Return the configuration loaded last, or None."""
    return _global_config


def get_parameter(key: str, default: Any = None) -> Any:
    """Look up a dotted key in the global configuration."""
    if _global_config is None:
        logger.warning("No global configuration loaded")
        return default
    return OmegaConf.select(_global_config, key, default=default)


class ConfigContext:
    """Temporarily override dotted keys of the global configuration.

    Example:
        with ConfigContext(**{'search.bounded.try_limit': 50}) as cfg:
            ...
    """

    def __init__(self, **changes):
        self.changes = changes
        self.saved: Dict[str, Any] = {}
        self.config = get_config()

    def __enter__(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No global configuration loaded")

        self.saved = {key: OmegaConf.select(self.config, key) for key in self.changes}
        self._apply(self.changes)
        return self.config

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.config is not None:
            self._apply(self.saved)

    def _apply(self, values: Dict[str, Any]) -> None:
        with open_dict(self.config):
            for key, value in values.items():
                OmegaConf.update(self.config, key, value, merge=False)
