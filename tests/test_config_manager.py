"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from eduverse.config import (
    ConfigError,
    ConfigManager,
    EduverseConfig,
    MissingSettingError,
    flatten_for_env,
    resolve_with_precedence,
)
from eduverse.config.resolver import parse_env


def _manager(tmp_path: Path, env: dict[str, str] | None = None) -> ConfigManager:
    return ConfigManager(config_path=tmp_path / "config.yaml", env=env or {})


def test_ensure_exists_creates_default_file(tmp_path: Path) -> None:
    manager = _manager(tmp_path)

    path = manager.ensure_exists()

    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert "Eduverse configuration file" in text
    assert "Last updated:" in text
    assert isinstance(manager.load(), EduverseConfig)


def test_default_path_lives_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    manager = ConfigManager(env={})

    assert manager.config_path == tmp_path / ".eduverse" / "config.yaml"


def test_precedence_is_file_then_env_then_cli(tmp_path: Path) -> None:
    env = {
        "EDUVERSE__POMODORO__CYCLES": "6",
        "EDUVERSE__ASSISTANT__TEMPERATURE": "0.9",
    }
    manager = _manager(tmp_path, env)
    manager.save(
        {"assistant": {"model": "gpt-4o-mini", "temperature": 0.1}, "pomodoro": {"cycles": 2}}
    )

    config = manager.load(cli_overrides={"assistant.temperature": 0.3})

    assert config.assistant.model == "gpt-4o-mini"
    assert config.pomodoro.cycles == 6
    # command line beats the environment
    assert config.assistant.temperature == pytest.approx(0.3)


def test_env_can_be_ignored(tmp_path: Path) -> None:
    manager = _manager(tmp_path, {"EDUVERSE__USER__ID": "someone-else"})

    assert manager.load(include_env=False).user.id == "local-user"
    assert manager.load().user.id == "someone-else"


def test_parse_env_reads_typed_values() -> None:
    overrides = parse_env(
        {
            "EDUVERSE__USER__DARK_MODE": "true",
            "EDUVERSE__POMODORO__FOCUS_SECONDS": "1200",
            "UNRELATED": "x",
        }
    )

    assert overrides == {"user": {"dark_mode": True}, "pomodoro": {"focus_seconds": 1200}}


def test_set_value_persists_parsed_value(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.ensure_exists()

    config = manager.set_value("pomodoro.focus_seconds", "1800")

    assert config.pomodoro.focus_seconds == 1800
    assert manager.load().pomodoro.focus_seconds == 1800


def test_set_value_rejects_invalid_value(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.ensure_exists()
    before = manager.read_text()

    with pytest.raises(ConfigError):
        manager.set_value("pomodoro.cycles", "zero")

    assert manager.read_text() == before


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=EduverseConfig(), file_overrides={"pomodoro": {"snooze": 3}}
        )


def test_flatten_for_env_covers_defaults() -> None:
    flat = flatten_for_env(EduverseConfig())

    assert flat["EDUVERSE__POMODORO__FOCUS_SECONDS"] == "1500"
    assert flat["EDUVERSE__ASSISTANT__API_KEY"] == "null"
    assert flat["EDUVERSE__FOLDERS__DEFAULT_SORT"] == "NAME"


def test_missing_setting_error_names_the_key() -> None:
    error = MissingSettingError("assistant.api_key")

    assert error.key == "assistant.api_key"
    assert "EDUVERSE__ASSISTANT__API_KEY" in str(error)
    assert isinstance(error, ConfigError)
