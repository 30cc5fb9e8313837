"""Folder and file organization."""

from .errors import FileOwnershipError, FolderError, FolderOperationError, NoActiveFolderError
from .models import FileRecord, Folder, SortCriterion
from .sorting import sort_files, sort_in_place
from .store import DocumentFolderStore, FolderStore
from .viewmodel import FOLDERS_ROUTE, FolderViewModel, Navigator

__all__ = [
    "FileOwnershipError",
    "FolderError",
    "FolderOperationError",
    "NoActiveFolderError",
    "FileRecord",
    "Folder",
    "SortCriterion",
    "sort_files",
    "sort_in_place",
    "DocumentFolderStore",
    "FolderStore",
    "FOLDERS_ROUTE",
    "FolderViewModel",
    "Navigator",
]
