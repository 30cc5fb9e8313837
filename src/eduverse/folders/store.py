"""Persistence contract for folders and its document-backed implementation."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from eduverse.documents import Collection, Document, DocumentStore, DocumentStoreError

from .errors import FolderOperationError
from .models import FileRecord, Folder, SortCriterion

LOGGER = logging.getLogger(__name__)

COLLECTION = "folders"


class FolderStore(Protocol):
    """Durable home of a user's folders.

    Every method either completes or raises; callers own retry decisions.
    """

    async def get_folders(self, owner_id: str, archived: Optional[bool] = None) -> list[Folder]:
        """Return the owner's folders, optionally filtered on the archived flag."""
        ...

    async def add_folder(self, folder: Folder) -> None:
        """Create ``folder``."""
        ...

    async def update_folder(self, folder: Folder) -> None:
        """Overwrite the stored copy of ``folder``, creating it when absent."""
        ...

    async def delete_folder(self, folder: Folder) -> None:
        """Delete ``folder`` together with its file records."""
        ...

    def new_folder_id(self) -> str:
        """Return an identifier no other folder uses."""
        ...

    def new_file_id(self, folder: Folder) -> str:
        """Return an identifier for a new file record in ``folder``."""
        ...


class DocumentFolderStore:
    """``FolderStore`` persisting one document per folder in a ``DocumentStore``.

    Timestamps are stored as epoch milliseconds and the file list is embedded in
    the folder document, so deleting the folder deletes its files.
    """

    def __init__(self, documents: DocumentStore) -> None:
        self._collection: Collection = documents.collection(COLLECTION)

    async def get_folders(self, owner_id: str, archived: Optional[bool] = None) -> list[Folder]:
        rows = await self._call(self._collection.where, ownerId=owner_id)
        folders = [decode_folder(doc_id, document) for doc_id, document in rows]
        if archived is None:
            return folders
        return [folder for folder in folders if folder.archived == archived]

    async def add_folder(self, folder: Folder) -> None:
        await self._call(self._collection.set, folder.id, encode_folder(folder))

    async def update_folder(self, folder: Folder) -> None:
        await self._call(self._collection.set, folder.id, encode_folder(folder))

    async def delete_folder(self, folder: Folder) -> None:
        await self._call(self._collection.delete, folder.id)

    def new_folder_id(self) -> str:
        return self._collection.new_id()

    def new_file_id(self, folder: Folder) -> str:
        taken = {record.id for record in folder.files}
        while True:
            candidate = self._collection.new_id()
            if candidate not in taken:
                return candidate

    async def _call(self, func: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except DocumentStoreError as exc:
            LOGGER.error("Folder store operation %s failed: %s", func.__name__, exc)
            raise FolderOperationError(str(exc)) from exc


def _to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _from_millis(value: Any) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def encode_file(record: FileRecord) -> Document:
    """Return the stored representation of a file record."""
    return {
        "id": record.id,
        "fileId": record.file_id,
        "name": record.name,
        "creationTime": _to_millis(record.created_at),
        "lastAccess": _to_millis(record.last_access),
        "numberAccess": record.access_count,
    }


def encode_folder(folder: Folder) -> Document:
    """Return the stored representation of a folder."""
    return {
        "name": folder.name,
        "ownerId": folder.owner_id,
        "archived": folder.archived,
        "filterType": folder.sort_criterion.value,
        "files": [encode_file(record) for record in folder.files],
    }


def decode_folder(doc_id: str, document: Document) -> Folder:
    """Build a ``Folder`` from its stored representation.

    Raises:
        FolderOperationError: If required fields are missing or malformed.
    """
    try:
        files = [
            FileRecord(
                id=raw["id"],
                folder_id=doc_id,
                file_id=raw.get("fileId", ""),
                name=raw["name"],
                created_at=_from_millis(raw["creationTime"]),
                last_access=_from_millis(raw["lastAccess"]),
                access_count=int(raw["numberAccess"]),
            )
            for raw in document.get("files", [])
        ]
        return Folder(
            id=doc_id,
            owner_id=document["ownerId"],
            name=document["name"],
            files=files,
            archived=bool(document.get("archived", False)),
            sort_criterion=SortCriterion(document.get("filterType", SortCriterion.NAME.value)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise FolderOperationError(f"Malformed folder document '{doc_id}': {exc}") from exc


__all__ = [
    "COLLECTION",
    "FolderStore",
    "DocumentFolderStore",
    "encode_folder",
    "decode_folder",
    "encode_file",
]
