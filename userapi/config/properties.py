import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

ENV_PREFIX = "USERAPI_"
DEFAULT_SOURCE = "default configuration"
DEFAULTS_PATH = Path(__file__).parent / "defaults.yml"

_MISSING = object()


class ConfigurationProperties:
    """
    Layered application configuration.

    Values are resolved from, lowest to highest precedence:
    - defaults.yml shipped with the package
    - application.yml in the working directory
    - application-<profile>.yml for the active profile

    Environment variables (USERAPI_SERVER_PORT for server.port) are only
    consulted for keys that none of the files define.
    """

    def __init__(self, profile: Optional[str] = None, load_defaults: bool = True):
        self._config: Dict[str, Any] = {}
        self._sources: Dict[str, str] = {}
        self.profile = profile or os.getenv(f"{ENV_PREFIX}PROFILE") or ""

        if load_defaults:
            self.load_from_file(DEFAULTS_PATH, source=DEFAULT_SOURCE)

            app_config = Path.cwd() / "application.yml"
            if app_config.exists():
                self.load_from_file(app_config, source="application.yml")

            if self.profile:
                profile_config = Path.cwd() / f"application-{self.profile}.yml"
                if profile_config.exists():
                    self.load_from_file(
                        profile_config, source=f"application-{self.profile}.yml"
                    )

    def load_from_file(self, path, source: Optional[str] = None):
        """Merge a YAML file into the current configuration."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")

        label = source or Path(path).name
        self._merge(self._config, data, label, prefix="")

    def _merge(self, target: dict, data: dict, source: str, prefix: str):
        for key, value in data.items():
            full_key = f"{prefix}{key}"
            if isinstance(value, dict):
                existing = target.get(key)
                if not isinstance(existing, dict):
                    existing = {}
                    target[key] = existing
                self._merge(existing, value, source, prefix=f"{full_key}.")
            else:
                target[key] = value
                self._sources[full_key] = source

    def _lookup(self, key: str) -> Any:
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key, falling back to USERAPI_* env vars."""
        value = self._lookup(key)
        if value is not _MISSING:
            return value

        env_key = ENV_PREFIX + key.replace(".", "_").upper()
        env_value = os.getenv(env_key)
        if env_value is not None:
            self._sources[key] = f"environment variable ({env_key})"
            return env_value

        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(key, default)
        if value is None:
            return None
        return int(value)

    def get_config_sources(self) -> Dict[str, str]:
        """Map of every known key to the source it was resolved from."""
        return dict(sorted(self._sources.items()))


_config: Optional[ConfigurationProperties] = None


def get_config() -> ConfigurationProperties:
    """Get the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = ConfigurationProperties()
    return _config


def reload_config(profile: Optional[str] = None) -> ConfigurationProperties:
    """Discard the cached configuration and load it again."""
    global _config
    _config = ConfigurationProperties(profile=profile)
    return _config


def log_config_sources(config: ConfigurationProperties, logger, max_cols: int = 3):
    """Log configuration keys grouped by source as boxed tables."""
    by_source: Dict[str, list] = {}
    for key, source in config.get_config_sources().items():
        by_source.setdefault(source, []).append(key)

    logger.info("Configuration sources:")
    for source, keys in by_source.items():
        logger.info(f"[{source}]")

        cols = max(1, min(max_cols, len(keys)))
        width = max(len(k) for k in keys)
        rows = [keys[i : i + cols] for i in range(0, len(keys), cols)]
        inner = cols * (width + 2) + (cols - 1)

        logger.info("┌" + "─" * inner + "┐")
        for row in rows:
            cells = [f" {k.ljust(width)} " for k in row]
            cells += [" " * (width + 2)] * (cols - len(row))
            logger.info("│" + " ".join(cells) + "│")
        logger.info("└" + "─" * inner + "┘")
