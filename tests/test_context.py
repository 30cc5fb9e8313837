"""Tests for the application context."""

from __future__ import annotations

from pathlib import Path

import pytest

from eduverse.config import ConfigManager, EduverseConfig
from eduverse.context import PREFERENCES_FILENAME, AppContext
from eduverse.folders import SortCriterion


def test_context_binds_storage_and_user(tmp_path: Path) -> None:
    config = EduverseConfig.model_validate(
        {
            "user": {"id": "student-7", "dark_mode": True},
            "storage": {"root": str(tmp_path / "data")},
            "folders": {"default_sort": "ACCESS_MOST"},
        }
    )

    context = AppContext.from_config(config)

    assert context.owner_id == "student-7"
    assert context.dark_mode
    assert context.documents.root == tmp_path / "data"
    assert context.preferences.path == tmp_path / "data" / PREFERENCES_FILENAME
    assert context.folder_view_model().owner_id == "student-7"
    assert context.timer_view_model().state.remaining_seconds == config.pomodoro.focus_seconds


@pytest.mark.asyncio
async def test_context_load_reads_configuration(tmp_path: Path) -> None:
    manager = ConfigManager(config_path=tmp_path / "config.yaml", env={})
    manager.save({"storage": {"root": str(tmp_path / "store")}, "user": {"id": "me"}})

    context = AppContext.load(manager, cli_overrides={"folders.default_sort": "CREATION_UP"})

    assert context.owner_id == "me"
    created = await context.folder_view_model().create_folder("Biology")
    assert created.sort_criterion is SortCriterion.CREATION_UP
    assert created.owner_id == "me"
