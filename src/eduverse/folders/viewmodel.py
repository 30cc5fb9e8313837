"""In-memory folder state mediating between a front end and a ``FolderStore``."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Awaitable, Callable, Iterable, NoReturn, Optional

from .errors import FileOwnershipError, FolderOperationError, NoActiveFolderError
from .models import FileRecord, Folder, SortCriterion
from .sorting import sort_in_place
from .store import FolderStore

LOGGER = logging.getLogger(__name__)

FOLDERS_ROUTE = "folders"

Navigator = Callable[[str], None]


class FolderViewModel:
    """Hold one user's folders and the folder currently open for editing.

    Mutations are applied to the in-memory list first and then persisted. When the
    store fails, the in-memory change is rolled back and ``FolderOperationError``
    is raised to the caller. Nothing is retried.

    The view-model assumes a single writer (the UI event stream); overlapping
    operations on the same folder resolve as last-write-wins.
    """

    def __init__(
        self,
        store: FolderStore,
        owner_id: str,
        *,
        navigator: Optional[Navigator] = None,
        default_sort: SortCriterion = SortCriterion.NAME,
    ) -> None:
        """Initialize the view-model.

        Args:
            store: Durable folder store.
            owner_id: Identifier of the user whose folders are managed.
            navigator: Callback receiving a route name when the UI should move.
            default_sort: Sort criterion given to folders created here.
        """
        self._store = store
        self._owner_id = owner_id
        self._navigator = navigator
        self._default_sort = default_sort
        self._folders: list[Folder] = []
        self._active: Optional[Folder] = None
        self._showing_archived = False

    @property
    def owner_id(self) -> str:
        """Return the identifier of the managed user."""
        return self._owner_id

    @property
    def folders(self) -> list[Folder]:
        """Return the folders of the current listing (archived or not)."""
        return list(self._folders)

    @property
    def active_folder(self) -> Optional[Folder]:
        """Return the folder open for editing, if any."""
        return self._active

    @property
    def showing_archived(self) -> bool:
        """Return whether the listing holds archived folders."""
        return self._showing_archived

    def select_folder(self, folder: Optional[Folder]) -> None:
        """Make ``folder`` the active folder (``None`` clears it)."""
        self._active = folder

    # ------------------------------------------------------------------ #
    # Folder operations                                                  #
    # ------------------------------------------------------------------ #

    async def load_folders(self, archived: bool = False) -> list[Folder]:
        """Replace the listing with the owner's archived or non-archived folders.

        On failure the current listing is left untouched.

        Raises:
            FolderOperationError: If the store cannot return the folders.
        """
        try:
            folders = await self._store.get_folders(self._owner_id, archived)
        except Exception as exc:
            LOGGER.error("Exception %s while trying to load the folders", exc)
            _reraise(exc, "load the folders")

        self._folders = list(folders)
        self._showing_archived = archived
        return self.folders

    async def add_folder(self, folder: Folder) -> Folder:
        """Append ``folder`` to the listing and create it in the store.

        A folder without an id receives one from the store.

        Returns:
            Folder: The folder as added, id and owner filled in.
        """
        changes: dict[str, str] = {}
        if not folder.id:
            changes["id"] = self._store.new_folder_id()
        if not folder.owner_id:
            changes["owner_id"] = self._owner_id
        if changes:
            folder = folder.model_copy(update=changes)

        active_before = self._active
        self._folders.append(folder)
        await self._persist(
            self._store.add_folder(folder),
            lambda: self._revert(folder, None, None, active_before),
            f"add folder {folder.name}",
        )
        return folder

    async def create_folder(self, name: str) -> Folder:
        """Create an empty, non-archived folder called ``name``."""
        folder = Folder(name=name, owner_id=self._owner_id, sort_criterion=self._default_sort)
        return await self.add_folder(folder)

    async def update_folder(self, folder: Folder, *, select: bool = False) -> Folder:
        """Replace the folder sharing ``folder.id`` or append it when new.

        The folder becomes active when ``select`` is true or when it already was.
        """
        index = self._index_of(folder.id)
        previous = None if index is None else self._folders[index]
        active_before = self._active
        if index is None:
            self._folders.append(folder)
        else:
            self._folders[index] = folder
        if select or (self._active is not None and self._active.id == folder.id):
            self._active = folder

        await self._persist(
            self._store.update_folder(folder),
            lambda: self._revert(folder, previous, index, active_before),
            f"update folder {folder.name}",
        )
        return folder

    async def delete_folder(self, folder: Folder) -> None:
        """Remove ``folder`` and delete it (with its files) from the store."""
        await self.delete_folders([folder])

    async def delete_folders(self, folders: Iterable[Folder]) -> None:
        """Remove several folders; the active reference is cleared if affected.

        Folders whose durable deletion did not complete are restored on failure.
        """
        targets = list(folders)
        ids = {folder.id for folder in targets}
        removed = [
            (index, folder) for index, folder in enumerate(self._folders) if folder.id in ids
        ]
        active_before = self._active
        self._folders = [folder for folder in self._folders if folder.id not in ids]
        if self._active is not None and self._active.id in ids:
            self._active = None

        deleted: set[str] = set()
        try:
            for folder in targets:
                await self._store.delete_folder(folder)
                deleted.add(folder.id)
        except Exception as exc:
            LOGGER.error("Exception %s while trying to delete folders", exc)
            for index, folder in removed:
                if folder.id not in deleted and self._index_of(folder.id) is None:
                    self._folders.insert(min(index, len(self._folders)), folder)
            if (
                self._active is None
                and active_before is not None
                and active_before.id in ids
                and active_before.id not in deleted
            ):
                self._active = active_before
            _reraise(exc, "delete folders")

    async def archive_folder(self, folder: Optional[Folder] = None) -> Folder:
        """Archive ``folder`` (the active folder by default)."""
        return await self._set_archived(folder, True)

    async def unarchive_folder(self, folder: Optional[Folder] = None) -> Folder:
        """Unarchive ``folder`` and ask the navigator to show the folder list."""
        updated = await self._set_archived(folder, False)
        if self._navigator is not None:
            self._navigator(FOLDERS_ROUTE)
        return updated

    async def rename_folder(self, name: str, folder: Optional[Folder] = None) -> Folder:
        """Rename ``folder`` (the active folder by default)."""
        target = folder or self._require_active()
        return await self.update_folder(target.model_copy(update={"name": name}, deep=True))

    # ------------------------------------------------------------------ #
    # File operations                                                    #
    # ------------------------------------------------------------------ #

    async def add_file(self, file: FileRecord, folder: Optional[Folder] = None) -> FileRecord:
        """Add ``file`` to ``folder`` (the active folder by default), keeping it sorted.

        Raises:
            FileOwnershipError: If a folder, ``folder`` included, already holds a file
                with that id.
        """
        target = folder or self._require_active()
        if file.id:
            owner = target if target.find_file(file.id) is not None else self._owner_of(file.id)
            if owner is not None:
                raise FileOwnershipError(f"File {file.id} already belongs to folder {owner.name}")
        updates = {"folder_id": target.id}
        if not file.id:
            updates["id"] = self._store.new_file_id(target)
        record = file.model_copy(update=updates)

        updated = target.model_copy(deep=True)
        updated.files.append(record)
        sort_in_place(updated.files, updated.sort_criterion)
        await self.update_folder(updated)
        return record

    async def create_file(
        self,
        name: str,
        file_id: str = "",
        folder: Optional[Folder] = None,
    ) -> FileRecord:
        """Create a new, never-opened file record called ``name``."""
        target = folder or self._require_active()
        record = FileRecord(id=self._store.new_file_id(target), file_id=file_id, name=name)
        return await self.add_file(record, target)

    async def delete_file(self, file: FileRecord, folder: Optional[Folder] = None) -> None:
        """Remove ``file`` from ``folder`` (the active folder by default)."""
        target = folder or self._require_active()
        if target.find_file(file.id) is None:
            return
        updated = target.model_copy(deep=True)
        updated.files = [record for record in updated.files if record.id != file.id]
        await self.update_folder(updated)

    async def open_file(
        self,
        file: FileRecord,
        folder: Optional[Folder] = None,
        *,
        now: Optional[datetime] = None,
    ) -> Optional[FileRecord]:
        """Record an access to ``file`` and persist it.

        Returns:
            Optional[FileRecord]: The updated record, or ``None`` when the folder
            does not contain the file.
        """
        target = folder or self._require_active()
        updated = target.model_copy(deep=True)
        record = updated.find_file(file.id)
        if record is None:
            return None
        record.touch(now)
        await self.update_folder(updated)
        return record

    def sort_by(self, criterion: SortCriterion | str) -> list[FileRecord]:
        """Reorder the active folder's files in place.

        Equal records keep their relative order. The store is not touched.

        Raises:
            NoActiveFolderError: If no folder is active.
        """
        active = self._require_active()
        criterion = SortCriterion(criterion)
        sort_in_place(active.files, criterion)
        active.sort_criterion = criterion
        return list(active.files)

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    async def _set_archived(self, folder: Optional[Folder], archived: bool) -> Folder:
        target = folder or self._require_active()
        updated = target.model_copy(update={"archived": archived}, deep=True)

        index = self._index_of(updated.id)
        previous = None if index is None else self._folders[index]
        active_before = self._active
        if index is not None:
            if updated.archived == self._showing_archived:
                self._folders[index] = updated
            else:
                del self._folders[index]
        if self._active is not None and self._active.id == updated.id:
            self._active = updated

        action = "archive" if archived else "unarchive"
        await self._persist(
            self._store.update_folder(updated),
            lambda: self._revert(updated, previous, index, active_before),
            f"{action} folder {updated.name}",
        )
        return updated

    async def _persist(
        self,
        operation: Awaitable[None],
        undo: Callable[[], None],
        description: str,
    ) -> None:
        try:
            await operation
        except Exception as exc:
            LOGGER.error("Exception %s while trying to %s", exc, description)
            undo()
            _reraise(exc, description)

    def _revert(
        self,
        applied: Folder,
        previous: Optional[Folder],
        position: Optional[int],
        active_before: Optional[Folder],
    ) -> None:
        """Undo one failed write, leaving changes made by other operations alone.

        Args:
            applied: Folder object the failed write put in memory.
            previous: Entry it replaced or removed from the listing, if any.
            position: Listing index ``previous`` occupied.
            active_before: Active folder before the failed write.
        """
        index = next(
            (i for i, folder in enumerate(self._folders) if folder is applied), None
        )
        if index is not None:
            if previous is None:
                del self._folders[index]
            else:
                self._folders[index] = previous
        elif previous is not None and position is not None and self._index_of(previous.id) is None:
            self._folders.insert(min(position, len(self._folders)), previous)
        if self._active is applied:
            self._active = active_before

    def _index_of(self, folder_id: str) -> Optional[int]:
        for index, folder in enumerate(self._folders):
            if folder.id == folder_id:
                return index
        return None

    def _owner_of(self, file_id: str) -> Optional[Folder]:
        for folder in self._folders:
            if folder.find_file(file_id) is not None:
                return folder
        return None

    def _require_active(self) -> Folder:
        if self._active is None:
            raise NoActiveFolderError("No folder is currently active.")
        return self._active


def _reraise(exc: Exception, description: str) -> NoReturn:
    if isinstance(exc, FolderOperationError):
        raise exc
    raise FolderOperationError(f"Failed to {description}: {exc}") from exc


__all__ = ["FolderViewModel", "FOLDERS_ROUTE", "Navigator"]
