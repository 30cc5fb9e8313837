"""CLI tests for the eduverse command group."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import httpx
from click.testing import CliRunner, Result

from eduverse.cli import cli
from eduverse.config import ConfigManager

QUIZ_TEXT = """\
What is the capital of France?
A) Berlin
B) Paris
C) Rome
D) Madrid
Correct Answer: B) Paris

How many legs does a spider have?
A) 6
B) 8
C) 10
D) 12
Correct Answer: B) 8
"""


def _env_with_home(tmp_path: Path, **extra: str) -> dict[str, Any]:
    env: dict[str, Any] = {key: None for key in os.environ if key.startswith("EDUVERSE__")}
    env["HOME"] = str(tmp_path)
    env.update(extra)
    return env


def _invoke(tmp_path: Path, args: list[str], **kwargs: Any) -> Result:
    env = _env_with_home(tmp_path, **kwargs.pop("env", {}))
    return CliRunner().invoke(cli, args, env=env, **kwargs)


def _json(result: Result) -> Any:
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _reply_transport(content: str) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": content}}]}
        )

    return httpx.MockTransport(handler)


def test_config_view_creates_and_displays_config(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["config", "view"])

    assert result.exit_code == 0
    assert "pomodoro:" in result.output
    assert (tmp_path / ".eduverse" / "config.yaml").exists()


def test_config_view_env_prints_assignments(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path,
        ["config", "view", "--env"],
        env={"EDUVERSE__POMODORO__CYCLES": "7"},
    )

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "EDUVERSE__POMODORO__CYCLES=7" in lines
    assert all(line.startswith("EDUVERSE__") for line in lines)
    assert lines == sorted(lines)


def test_config_set_updates_value_and_writes_diff(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["config", "set", "pomodoro.cycles", "--value", "6"])

    assert result.exit_code == 0
    assert "Updated pomodoro.cycles" in result.output

    manager = ConfigManager(config_path=tmp_path / ".eduverse" / "config.yaml", env={})
    assert manager.load().pomodoro.cycles == 6


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["config", "set", "pomodoro.cycles", "--value", "many"])

    assert result.exit_code != 0
    assert "Invalid configuration values" in result.output


def test_folder_lifecycle(tmp_path: Path) -> None:
    assert _invoke(tmp_path, ["folders", "create", "Physics"]).exit_code == 0
    [folder] = _json(_invoke(tmp_path, ["folders", "list", "--json"]))["folders"]
    folder_id = folder["id"]
    assert folder["name"] == "Physics"

    assert _invoke(tmp_path, ["folders", "add-file", folder_id, "waves.pdf"]).exit_code == 0
    assert _invoke(tmp_path, ["folders", "add-file", folder_id, "atoms.pdf"]).exit_code == 0
    shown = _json(_invoke(tmp_path, ["folders", "show", folder_id, "--json"]))
    assert [record["name"] for record in shown["files"]] == ["atoms.pdf", "waves.pdf"]

    waves_id = shown["files"][1]["id"]
    opened = _invoke(tmp_path, ["folders", "open", folder_id, waves_id])
    assert opened.exit_code == 0
    assert "1 time(s)" in opened.output

    sorted_view = _json(
        _invoke(tmp_path, ["folders", "show", folder_id, "--sort", "ACCESS_MOST", "--json"])
    )
    assert [record["name"] for record in sorted_view["files"]] == ["waves.pdf", "atoms.pdf"]

    assert _invoke(tmp_path, ["folders", "rename", folder_id, "Quantum"]).exit_code == 0
    assert _invoke(tmp_path, ["folders", "remove-file", folder_id, waves_id]).exit_code == 0
    shown = _json(_invoke(tmp_path, ["folders", "show", folder_id, "--json"]))
    assert shown["name"] == "Quantum"
    assert [record["name"] for record in shown["files"]] == ["atoms.pdf"]


def test_archive_and_unarchive(tmp_path: Path) -> None:
    _invoke(tmp_path, ["folders", "create", "History"])
    [folder] = _json(_invoke(tmp_path, ["folders", "list", "--json"]))["folders"]

    assert _invoke(tmp_path, ["folders", "archive", folder["id"]]).exit_code == 0
    assert _json(_invoke(tmp_path, ["folders", "list", "--json"]))["folders"] == []
    archived = _json(_invoke(tmp_path, ["folders", "list", "--archived", "--json"]))["folders"]
    assert [item["id"] for item in archived] == [folder["id"]]

    restored = _invoke(tmp_path, ["folders", "unarchive", folder["id"]])
    assert restored.exit_code == 0
    assert "Folder restored" in restored.output
    assert "History" in restored.output


def test_delete_folders(tmp_path: Path) -> None:
    _invoke(tmp_path, ["folders", "create", "One"])
    _invoke(tmp_path, ["folders", "create", "Two"])
    listing = _json(_invoke(tmp_path, ["folders", "list", "--json"]))["folders"]
    ids = [item["id"] for item in listing]

    result = _invoke(tmp_path, ["folders", "delete", *ids])

    assert result.exit_code == 0
    assert _json(_invoke(tmp_path, ["folders", "list", "--json"]))["folders"] == []


def test_unknown_folder_is_reported(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["folders", "show", "nope"])

    assert result.exit_code != 0
    assert "No folder with id nope" in result.output


def test_todo_commands(tmp_path: Path) -> None:
    assert _invoke(tmp_path, ["todo", "add", "Read chapter 3"]).exit_code == 0
    [item] = _json(_invoke(tmp_path, ["todo", "list", "--json"]))["actual"]

    assert _invoke(tmp_path, ["todo", "time", item["id"], "40"]).exit_code == 0
    assert _invoke(tmp_path, ["todo", "done", item["id"]]).exit_code == 0

    listing = _json(_invoke(tmp_path, ["todo", "list", "--json"]))
    assert listing["actual"] == []
    assert listing["done"][0]["time_spent"] == 40

    assert _invoke(tmp_path, ["todo", "undo", item["id"]]).exit_code == 0
    assert _invoke(tmp_path, ["todo", "rename", item["id"], "Read chapter 4"]).exit_code == 0
    listing = _json(_invoke(tmp_path, ["todo", "list", "--json"]))
    assert listing["actual"][0]["name"] == "Read chapter 4"

    assert _invoke(tmp_path, ["todo", "delete", item["id"]]).exit_code == 0
    assert _json(_invoke(tmp_path, ["todo", "list", "--json"])) == {"actual": [], "done": []}


def test_timer_run_credits_focus_time(tmp_path: Path) -> None:
    _invoke(tmp_path, ["todo", "add", "Essay"])
    [item] = _json(_invoke(tmp_path, ["todo", "list", "--json"]))["actual"]

    result = _invoke(
        tmp_path,
        ["timer", "run", "--focus", "1", "--cycles", "1", "--interval", "0", "--todo", item["id"]],
    )

    assert result.exit_code == 0, result.output
    assert "Long break" in result.output
    assert "Completed 1 focus session(s)" in result.output
    [credited] = _json(_invoke(tmp_path, ["todo", "list", "--json"]))["actual"]
    assert credited["time_spent"] == 1


def test_calc(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["calc", "sqrt(16) + 2^3"])

    assert result.exit_code == 0
    assert result.output.strip() == "12"


def test_calc_reports_undefined(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["calc", "1/0"])

    assert result.exit_code == 1
    assert "Undefined" in result.output


def test_notification_preferences(tmp_path: Path) -> None:
    assert _json(_invoke(tmp_path, ["notifications", "show", "--json"])) == {
        "taskEnabled": True,
        "eventEnabled": True,
    }

    assert _invoke(tmp_path, ["notifications", "set", "--no-event"]).exit_code == 0

    assert _json(_invoke(tmp_path, ["notifications", "show", "--json"])) == {
        "taskEnabled": True,
        "eventEnabled": False,
    }


def test_notifications_set_requires_a_flag(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["notifications", "set"])

    assert result.exit_code == 2


def test_ask_requires_api_key(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["ask", "What", "is", "osmosis?"])

    assert result.exit_code == 1
    assert "assistant.api_key" in result.output


def test_ask_prints_answer(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path,
        ["ask", "What is osmosis?"],
        env={"EDUVERSE__ASSISTANT__API_KEY": "sk-test"},
        obj={"transport": _reply_transport("Diffusion of water.")},
    )

    assert result.exit_code == 0, result.output
    assert "Diffusion of water." in result.output


def test_ask_failure_shows_generic_error(tmp_path: Path) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503))

    result = _invoke(
        tmp_path,
        ["ask", "What is osmosis?"],
        env={"EDUVERSE__ASSISTANT__API_KEY": "sk-test"},
        obj={"transport": transport},
    )

    assert result.exit_code == 1
    assert "An error occurred. Please try again." in result.output


def test_quiz_interactive_scoring(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path,
        ["quiz", "geography", "--count", "2"],
        env={"EDUVERSE__ASSISTANT__API_KEY": "sk-test"},
        obj={"transport": _reply_transport(QUIZ_TEXT)},
        input="b\nA\n",
    )

    assert result.exit_code == 0, result.output
    assert "Correct!" in result.output
    assert "Correct answer: B) 8" in result.output
    assert "Score: 1/2" in result.output


def test_quiz_json(tmp_path: Path) -> None:
    payload = _json(
        _invoke(
            tmp_path,
            ["quiz", "geography", "--count", "1", "--json"],
            env={"EDUVERSE__ASSISTANT__API_KEY": "sk-test"},
            obj={"transport": _reply_transport(QUIZ_TEXT)},
        )
    )

    assert payload["questions"][0]["correct_answer"] == "B) Paris"


def test_quiz_json_error_payload(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path,
        ["quiz", "geography", "--json"],
        env={"EDUVERSE__ASSISTANT__API_KEY": "sk-test"},
        obj={"transport": _reply_transport("No quiz today.")},
    )

    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "quiz_error"


def test_quiet_flag_suppresses_confirmation(tmp_path: Path) -> None:
    result = _invoke(tmp_path, ["--quiet", "folders", "create", "Silent"])

    assert result.exit_code == 0
    assert result.output == ""
