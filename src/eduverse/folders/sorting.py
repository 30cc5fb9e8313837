"""Sort keys for folder contents."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from .models import FileRecord, SortCriterion

# criterion -> (key, descending)
_ORDERINGS: dict[SortCriterion, tuple[Callable[[FileRecord], Any], bool]] = {
    SortCriterion.NAME: (lambda record: record.name, False),
    SortCriterion.CREATION_UP: (lambda record: record.created_at, False),
    SortCriterion.CREATION_DOWN: (lambda record: record.created_at, True),
    SortCriterion.ACCESS_RECENT: (lambda record: record.last_access, True),
    SortCriterion.ACCESS_OLD: (lambda record: record.last_access, False),
    SortCriterion.ACCESS_MOST: (lambda record: record.access_count, True),
    SortCriterion.ACCESS_LEAST: (lambda record: record.access_count, False),
}


def sort_key(criterion: SortCriterion | str) -> tuple[Callable[[FileRecord], Any], bool]:
    """Return the ``(key, descending)`` pair for ``criterion``.

    Raises:
        ValueError: If ``criterion`` is not a known sort criterion.
    """
    return _ORDERINGS[SortCriterion(criterion)]


def sort_in_place(files: list[FileRecord], criterion: SortCriterion | str) -> None:
    """Sort ``files`` in place; records comparing equal keep their relative order."""
    key, descending = sort_key(criterion)
    files.sort(key=key, reverse=descending)


def sort_files(files: Iterable[FileRecord], criterion: SortCriterion | str) -> list[FileRecord]:
    """Return a new list of ``files`` ordered by ``criterion`` (stable)."""
    key, descending = sort_key(criterion)
    return sorted(files, key=key, reverse=descending)


__all__ = ["sort_key", "sort_in_place", "sort_files"]
