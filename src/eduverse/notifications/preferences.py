"""Key/value preference file holding notification authorizations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import PreferenceError
from .models import NotificationAuthorizations

LOGGER = logging.getLogger(__name__)

AUTHORIZATIONS_KEY = "notifAuthKey"


class PreferenceStore:
    """Persist small application preferences in a JSON file."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: JSON file holding the preferences; created on first write.
        """
        self._path = path.expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Any:
        """Return the value stored under ``key`` or ``None``."""
        return self._read().get(key)

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        data = self._read()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load_authorizations(self) -> NotificationAuthorizations:
        """Return the saved authorizations, defaulting to everything enabled.

        Raises:
            PreferenceError: If the saved value is not a valid authorization object.
        """
        raw = self.get(AUTHORIZATIONS_KEY)
        if raw is None:
            return NotificationAuthorizations()
        try:
            return NotificationAuthorizations.from_json(raw)
        except (TypeError, ValidationError) as exc:
            raise PreferenceError(f"Invalid notification preferences: {exc}") from exc

    def save_authorizations(self, authorizations: NotificationAuthorizations) -> None:
        self.put(AUTHORIZATIONS_KEY, authorizations.to_json())
        LOGGER.debug("Saved notification preferences to %s", self._path)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise PreferenceError(f"Invalid preference file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PreferenceError(f"Preference file {self._path} must contain an object.")
        return data


__all__ = ["PreferenceStore", "AUTHORIZATIONS_KEY"]
