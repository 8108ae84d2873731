"""Configuration management for mint-admin"""

import os
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Dict, Any, Optional, Mapping

import yaml

from mintadmin.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_DIR,
    DEFAULT_POLL_INTERVAL,
    CLI_DEFAULT_STACK_NAME,
    ENV_OVERRIDES,
)
from mintadmin.exceptions import ConfigurationError


@dataclass
class AdminConfig:
    """Resolved configuration for one mint-admin invocation"""

    stack_name: str = CLI_DEFAULT_STACK_NAME
    region: Optional[str] = None
    profile: Optional[str] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    timeout: Optional[float] = None  # seconds, None = wait forever
    log_dir: str = DEFAULT_LOG_DIR

    @property
    def log_path(self) -> Path:
        return Path(self.log_dir).expanduser()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigLoader:
    """
    Builds AdminConfig from layered sources.

    Precedence (lowest first):
    - built-in defaults
    - YAML config file
    - environment variables
    - explicit overrides (CLI flags)
    """

    KNOWN_KEYS = {f.name for f in fields(AdminConfig)}

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize loader

        Args:
            environ: Environment mapping (defaults to os.environ)
        """
        self.environ = os.environ if environ is None else environ

    def resolve_path(self, path: Optional[Path] = None) -> Optional[Path]:
        """
        Find the config file to read.

        An explicit path or $MINT_ADMIN_CONFIG must exist; the default
        location is optional.
        """
        if path is not None:
            return Path(path).expanduser()

        env_path = self.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()

        default_path = Path(DEFAULT_CONFIG_PATH).expanduser()
        if default_path.exists():
            return default_path
        return None

    def load_file(self, path: Path) -> Dict[str, Any]:
        """Read and validate a YAML config file."""
        if not path.exists():
            raise ConfigurationError(
                f"Config file not found: {path}",
                context=f"Create it or unset {CONFIG_ENV_VAR}",
            )

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in config file: {path}", context=str(e)
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {path}",
                context=f"Got: {type(data).__name__}",
            )

        unknown = sorted(set(data) - self.KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys in {path}: {', '.join(unknown)}",
                context=f"Valid keys: {', '.join(sorted(self.KNOWN_KEYS))}",
            )

        return data

    def load_env(self) -> Dict[str, Any]:
        """Collect config values from environment variables."""
        values = {}
        for env_var, key in ENV_OVERRIDES.items():
            value = self.environ.get(env_var)
            if value:
                values[key] = value
        return values

    def load(
        self,
        path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> AdminConfig:
        """
        Load configuration from all sources.

        Args:
            path: Explicit config file (e.g. from --config)
            overrides: Values from CLI flags; None entries are ignored

        Returns:
            AdminConfig

        Raises:
            ConfigurationError: If any source is invalid
        """
        merged: Dict[str, Any] = {}

        config_path = self.resolve_path(path)
        if config_path is not None:
            merged.update(self.load_file(config_path))

        merged.update(self.load_env())

        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        return self._build(merged)

    def _build(self, values: Dict[str, Any]) -> AdminConfig:
        config = AdminConfig()

        if values.get("stack_name"):
            config.stack_name = str(values["stack_name"])
        if values.get("region"):
            config.region = str(values["region"])
        if values.get("profile"):
            config.profile = str(values["profile"])
        if values.get("log_dir"):
            config.log_dir = str(values["log_dir"])
        if values.get("poll_interval") is not None:
            config.poll_interval = self._seconds("poll_interval", values["poll_interval"])
        if values.get("timeout") is not None:
            config.timeout = self._seconds("timeout", values["timeout"]) or None

        return config

    @staticmethod
    def _seconds(key: str, value: Any) -> float:
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid value for {key}: {value!r}",
                context="Expected a number of seconds",
            )
        if seconds < 0:
            raise ConfigurationError(
                f"Invalid value for {key}: {value!r}",
                context="Must not be negative",
            )
        return seconds
