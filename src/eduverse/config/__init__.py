"""Configuration management for Eduverse."""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError, MissingSettingError
from .models import EduverseConfig
from .resolver import flatten_for_env, parse_env, resolve_with_precedence, set_nested

DEFAULT_CONFIG_PATH = Path("~/.eduverse/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    """\
    # Eduverse configuration file
    # Edit by hand or with `eduverse config set <section.key> --value <value>`.
    """
)


class ConfigManager:
    """Read and write the YAML configuration file and resolve effective settings."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        ensure_file: bool = True,
    ) -> EduverseConfig:
        """Return the effective configuration.

        Args:
            cli_overrides: Dotted overrides supplied by the caller.
            include_env: Whether ``EDUVERSE__*`` environment variables apply.
            ensure_file: Create the file with defaults when it is missing.

        Raises:
            ConfigError: If the file cannot be parsed or values are invalid.
        """
        if ensure_file:
            self.ensure_exists()

        return resolve_with_precedence(
            defaults=EduverseConfig(),
            file_overrides=self._read_file(),
            env_overrides=parse_env(self._env) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def set_value(self, key: str, raw_value: str) -> EduverseConfig:
        """Persist a single dotted setting after validating the result.

        The raw value is parsed as YAML, so ``25`` becomes an int and ``false`` a bool.
        """
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value

        data = self._read_file()
        set_nested(data, key.split("."), value)
        config = resolve_with_precedence(defaults=EduverseConfig(), file_overrides=data)
        self._write_file(data)
        return config

    def save(self, config: EduverseConfig | Mapping[str, Any]) -> None:
        """Persist configuration data to disk."""
        if isinstance(config, EduverseConfig):
            data = config.model_dump(mode="python")
        else:
            data = dict(config)
        self._write_file(data)

    def ensure_exists(self) -> Path:
        """Create the configuration file with defaults if needed."""
        if not self._config_path.exists():
            self._write_file(EduverseConfig().model_dump(mode="python"))
        return self._config_path

    def read_text(self) -> str:
        """Return the raw configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def _read_file(self) -> dict[str, Any]:
        if not self._config_path.exists():
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def _write_file(self, data: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        body = yaml.safe_dump(dict(data), sort_keys=False)
        self._config_path.write_text(
            f"{_CONFIG_HEADER}# Last updated: {stamp}\n{body}", encoding="utf-8"
        )


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "EduverseConfig",
    "resolve_with_precedence",
    "flatten_for_env",
    "ConfigError",
    "MissingSettingError",
]
