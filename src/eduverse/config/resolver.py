"""Helpers that merge configuration layers into a validated model."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import EduverseConfig

ENV_PREFIX = "EDUVERSE__"


def resolve_with_precedence(
    *,
    defaults: EduverseConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> EduverseConfig:
    """Layer overrides on top of ``defaults`` (file, then environment, then CLI).

    Args:
        defaults: Baseline configuration.
        file_overrides: Values read from the YAML configuration file.
        env_overrides: Nested values extracted from ``EDUVERSE__*`` variables.
        cli_overrides: Dotted or nested values supplied on the command line.

    Returns:
        EduverseConfig: Validated configuration.

    Raises:
        ConfigError: If a layer is malformed or the merged values fail validation.
    """
    merged = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for label, layer in layers:
        if layer is None:
            continue
        merged = deep_merge(merged, expand_dotted(layer, source_name=label))

    try:
        return EduverseConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: EduverseConfig) -> Dict[str, str]:
    """Render ``config`` as ``EDUVERSE__SECTION__KEY`` environment assignments."""
    flat: Dict[str, str] = {}

    def _walk(path: list[str], value: Any) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                _walk([*path, str(key)], child)
            return
        name = ENV_PREFIX + "__".join(segment.upper() for segment in path)
        if isinstance(value, list):
            flat[name] = yaml.safe_dump(value, default_flow_style=True).strip()
        elif value is None:
            flat[name] = "null"
        else:
            flat[name] = str(value)

    _walk([], config.model_dump(mode="python"))
    return flat


def parse_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Extract nested overrides from ``EDUVERSE__*`` variables.

    Values are parsed as YAML scalars so ``"true"`` and ``"25"`` become typed values.
    """
    overrides: dict[str, Any] = {}
    for key, raw in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not path:
            continue
        try:
            value = yaml.safe_load(raw)
        except yaml.YAMLError:
            value = raw
        set_nested(overrides, path, value)
    return overrides


def set_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign ``value`` at ``path`` inside ``target``, creating mappings as needed.

    Raises:
        ConfigError: If a scalar already occupies an intermediate segment.
    """
    node = target
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(f"Cannot assign into '{segment}' because it is not a mapping.")
        node = child
    node[path[-1]] = value


def expand_dotted(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Turn ``{"a.b": 1}`` style keys into nested mappings."""
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = expand_dotted(value, source_name=source_name)
        path = key.split(".")
        existing = _lookup(result, path)
        if isinstance(existing, dict) and isinstance(value, dict):
            value = deep_merge(existing, value)
        set_nested(result, path, value)
    return result


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping with ``overrides`` merged recursively into ``base``."""
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _lookup(target: Mapping[str, Any], path: list[str]) -> Any:
    node: Any = target
    for segment in path:
        if not isinstance(node, MappingABC) or segment not in node:
            return None
        node = node[segment]
    return node


__all__ = [
    "ENV_PREFIX",
    "resolve_with_precedence",
    "flatten_for_env",
    "parse_env",
    "set_nested",
    "expand_dotted",
    "deep_merge",
]
