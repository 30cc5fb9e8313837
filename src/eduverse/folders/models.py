"""Folder and file record models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SortCriterion(str, Enum):
    """Orderings available for the files of a folder."""

    NAME = "NAME"
    CREATION_UP = "CREATION_UP"
    CREATION_DOWN = "CREATION_DOWN"
    ACCESS_RECENT = "ACCESS_RECENT"
    ACCESS_OLD = "ACCESS_OLD"
    ACCESS_MOST = "ACCESS_MOST"
    ACCESS_LEAST = "ACCESS_LEAST"


class FileRecord(BaseModel):
    """Metadata describing a file stored in a folder.

    Attributes:
        id: Identifier of the record, unique across folders.
        folder_id: Identifier of the owning folder.
        file_id: Reference to the stored content the record points at.
        name: Display name.
        created_at: Creation timestamp.
        last_access: Timestamp of the most recent open.
        access_count: Number of times the file was opened.
    """

    id: str
    folder_id: str = ""
    file_id: str = ""
    name: str
    created_at: datetime = Field(default_factory=_now)
    last_access: datetime = Field(default_factory=_now)
    access_count: int = Field(default=0, ge=0)

    def touch(self, now: Optional[datetime] = None) -> None:
        """Record an access: bump the counter and move the access timestamp."""
        self.last_access = now or _now()
        self.access_count += 1


class Folder(BaseModel):
    """Named collection of file records owned by one user.

    The order of ``files`` carries no meaning of its own; it is re-derived by
    ``sort_criterion`` whenever the folder is sorted.
    """

    id: str = ""
    owner_id: str = ""
    name: str
    files: List[FileRecord] = Field(default_factory=list)
    archived: bool = False
    sort_criterion: SortCriterion = SortCriterion.NAME

    def find_file(self, file_id: str) -> Optional[FileRecord]:
        """Return the record with id ``file_id`` or ``None``."""
        return next((record for record in self.files if record.id == file_id), None)


__all__ = ["FileRecord", "Folder", "SortCriterion"]
