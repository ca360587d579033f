import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from userdesk.exceptions import ConfigurationException

ENV_PREFIX = "USERDESK_"
DEFAULTS_PATH = Path(__file__).parent / "defaults.yml"
DEFAULT_SOURCE = "default configuration"
OVERRIDE_SOURCE = "programmatic override"


class ConfigurationProperties:
    """
    Layered application configuration.

    Precedence, lowest to highest:
        1. defaults.yml shipped with the package
        2. application.yml in the config directory
        3. application-{profile}.yml in the config directory
        4. explicit overrides passed to the constructor

    Environment variables (USERDESK_<KEY>, dots replaced by underscores)
    are only consulted for keys that none of the above define.
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ):
        if profile is None:
            profile = os.environ.get(f"{ENV_PREFIX}PROFILE", "")
        self.profile = profile
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()
        self._values: Dict[str, Any] = {}
        self._sources: Dict[str, str] = {}

        self._merge(self._read_yaml(DEFAULTS_PATH), DEFAULT_SOURCE)

        app_config = self.config_dir / "application.yml"
        if app_config.exists():
            self._merge(self._read_yaml(app_config), app_config.name)

        if self.profile:
            profile_config = self.config_dir / f"application-{self.profile}.yml"
            if profile_config.exists():
                self._merge(self._read_yaml(profile_config), profile_config.name)

        for key, value in (overrides or {}).items():
            self._values[key] = value
            self._sources[key] = OVERRIDE_SOURCE

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationException(f"{path} must contain a mapping at top level")
        return data

    def _merge(self, data: Mapping[str, Any], source: str, prefix: str = ""):
        """Flatten nested mappings into dotted keys, recording where each came from."""
        for key, value in data.items():
            full_key = f"{prefix}{key}"
            if isinstance(value, dict):
                self._merge(value, source, prefix=f"{full_key}.")
            else:
                self._values[full_key] = value
                self._sources[full_key] = source

    @staticmethod
    def env_var_name(key: str) -> str:
        return ENV_PREFIX + key.upper().replace(".", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dotted key.

        Args:
            key: Dotted key, e.g. "database.pool.size"
            default: Returned when neither files nor environment define the key

        Returns:
            The configured value
        """
        if key in self._values:
            return self._values[key]

        env_name = self.env_var_name(key)
        if env_name in os.environ:
            self._sources[key] = f"environment variable ({env_name})"
            return os.environ[env_name]

        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes", "on")

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationException(
                f"Configuration key '{key}' must be an integer, got {value!r}"
            ) from e

    def get_config_sources(self) -> Dict[str, str]:
        """Return the source of every known key, sorted by key."""
        return dict(sorted(self._sources.items()))


_config: Optional[ConfigurationProperties] = None


def get_config() -> ConfigurationProperties:
    """Get the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = ConfigurationProperties()
    return _config


def reload_config(**kwargs) -> ConfigurationProperties:
    """Discard the process-wide configuration and load it again."""
    global _config
    _config = ConfigurationProperties(**kwargs)
    return _config


def log_config_sources(config: ConfigurationProperties, logger, max_cols: int = 3):
    """
    Log every configuration key grouped by the source that set it.

    Each group is rendered as a boxed table with up to `max_cols` keys per row.
    """
    sources = config.get_config_sources()
    if not sources:
        return

    grouped: Dict[str, List[str]] = {}
    for key, source in sources.items():
        grouped.setdefault(source, []).append(key)

    logger.info("Configuration sources:")
    for source, keys in grouped.items():
        logger.info(f"[{source}]")

        width = max(len(key) for key in keys)
        cols = max(1, min(max_cols, len(keys)))
        inner_width = cols * (width + 2) + (cols - 1)

        logger.info("┌" + "─" * inner_width + "┐")
        for start in range(0, len(keys), cols):
            row = keys[start : start + cols]
            cells = [f" {key.ljust(width)} " for key in row]
            cells.extend([" " * (width + 2)] * (cols - len(row)))
            logger.info("│" + " ".join(cells) + "│")
        logger.info("└" + "─" * inner_width + "┘")
