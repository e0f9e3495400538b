# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML files and BXGRAPH_* env vars
#  - Caches composed config
#  - Provides reload() for re-reading sources
# ======================================================================

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from bxgraph.helpers.exceptions import ConfigError

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================

INTERNAL_MAX_CYCLE_LENGTH = 10  # Longest indirect recursion reported
INTERNAL_DEFAULT_MAX_DEPTH = 5  # Traversal depth when --max-depth is omitted
INTERNAL_ERROR_DISPLAY_LIMIT = 10  # Errors printed per import summary
INTERNAL_DEFAULT_FILE_PATTERN = "*.json"  # Directory import pattern
INTERNAL_DIRECTORY_BATCH_SIZE = 10  # Files per progress group in directory import

ALLOWED_ENV_KEYS = {
    "arango_hosts",
    "arango_username",
    "arango_password",
    "arango_db_name",
    "batch_size",
    "log_level",
}

ENV_PREFIX = "BXGRAPH_"


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env),
    caches the result, and provides reload capability.
    """

    def __init__(self, config_path: str | None = None, overrides: dict[str, Any] | None = None) -> None:
        self._config: dict[str, Any] | None = None
        self._config_path = config_path
        self._overrides = overrides or {}
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("batch_size")
            1000
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        self._logger.info("[config] Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def validate_config(self) -> None:
        """
        Reject configurations the CLI cannot run with.

        Raises:
            ConfigError: empty host, username or db name; non-positive batch size
        """
        cfg = self.get_config()
        for key in ("arango_hosts", "arango_username", "arango_db_name"):
            value = cfg.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{key} cannot be empty")
        batch_size = cfg.get("batch_size")
        if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size <= 0:
            raise ConfigError("batch_size must be a positive integer")

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/bxgraph/config.yaml  (if present)
          3) ./config/config.yaml      (if present)
          4) $BXGRAPH_CONFIG_PATH      (if set)
          5) explicit config path (--config)
          6) overrides dict passed to the constructor
          7) Environment variables (BXGRAPH_*)
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/bxgraph/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv("BXGRAPH_CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if self._config_path:
            if not os.path.exists(self._config_path):
                raise ConfigError(f"Config file not found: {self._config_path}")
            self._deep_merge(cfg, self._load_yaml(self._config_path))

        if self._overrides:
            self._deep_merge(cfg, self._overrides)

        self._apply_env_overrides(cfg)

        self._logger.debug(f"[config] compose() loaded config; keys: {list(cfg.keys())}")
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for USER-CONFIGURABLE settings only."""
        return {
            # ArangoDB connection
            "arango_hosts": "http://localhost:8529",
            "arango_username": "root",
            "arango_password": "",
            "arango_db_name": "bxgraph",
            # Functions written per round-trip during import
            "batch_size": 1000,
            "log_level": "INFO",
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge dict b into dict a (mutates a, returns it)."""
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """Load a YAML mapping; returns {} if the file is absent, unreadable or not a mapping."""
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"[config] Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(loaded, dict):
            if loaded is not None:
                self._logger.warning(f"[config] Ignoring {path}: top level is not a mapping")
            return {}
        return loaded

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides for the user-configurable keys only.

        Supported formats:
          BXGRAPH_ARANGO_HOSTS=http://arangodb:8529
          BXGRAPH_ARANGO_PASSWORD=secret
          BXGRAPH_BATCH_SIZE=500
          BXGRAPH_LOG_LEVEL=DEBUG
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX) or k == "BXGRAPH_CONFIG_PATH":
                continue

            key = k[len(ENV_PREFIX) :].lower()
            if key not in ALLOWED_ENV_KEYS:
                self._logger.debug(f"[config] Ignoring environment override for unknown key: {key}")
                continue

            val: Any
            if v.lower() in ("true", "false"):
                val = v.lower() == "true"
            elif v.isdigit():
                val = int(v)
            else:
                val = v
            cfg[key] = val
