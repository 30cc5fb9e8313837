"""Folder management errors."""


class FolderError(Exception):
    """Base exception for folder and file operations."""


class FolderOperationError(FolderError):
    """Raised when the folder store fails to complete a durable operation."""


class NoActiveFolderError(FolderError):
    """Raised when an operation needs an active folder and none is selected."""


class FileOwnershipError(FolderError):
    """Raised when a file would end up in more than one folder."""
