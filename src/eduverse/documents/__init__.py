"""Local JSON document database used as the durable copy of user data.

Each collection lives in ``<root>/<collection>.json`` as a mapping of document id to
document body. The API mirrors the small subset of a hosted document database the
feature stores need: fresh ids, ``set``/``update``/``delete`` by id, and equality
queries.
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Iterator

from .errors import DocumentStoreError, MissingDocumentError

Document = dict[str, Any]


class Collection:
    """A named set of JSON documents backed by a single file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def name(self) -> str:
        """Return the collection name."""
        return self._path.stem

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    def new_id(self) -> str:
        """Return a fresh document id that is not yet used in this collection."""
        existing = self._read()
        while True:
            candidate = uuid.uuid4().hex[:20]
            if candidate not in existing:
                return candidate

    def get(self, doc_id: str) -> Document:
        """Return the document stored under ``doc_id``.

        Raises:
            MissingDocumentError: If no such document exists.
        """
        documents = self._read()
        if doc_id not in documents:
            raise MissingDocumentError(f"No document '{doc_id}' in collection '{self.name}'")
        return documents[doc_id]

    def set(self, doc_id: str, data: Document) -> None:
        """Create or overwrite the document stored under ``doc_id``."""
        documents = self._read()
        documents[doc_id] = data
        self._write(documents)

    def update(self, doc_id: str, data: Document) -> None:
        """Merge ``data`` into an existing document.

        Raises:
            MissingDocumentError: If the document does not exist.
        """
        documents = self._read()
        if doc_id not in documents:
            raise MissingDocumentError(f"No document '{doc_id}' in collection '{self.name}'")
        documents[doc_id] = {**documents[doc_id], **data}
        self._write(documents)

    def delete(self, doc_id: str) -> None:
        """Remove a document; deleting a missing document is a no-op."""
        documents = self._read()
        if documents.pop(doc_id, None) is not None:
            self._write(documents)

    def where(self, **equals: Any) -> list[tuple[str, Document]]:
        """Return ``(id, document)`` pairs whose fields equal every keyword given."""
        return [
            (doc_id, document)
            for doc_id, document in self._read().items()
            if all(document.get(field) == value for field, value in equals.items())
        ]

    def __iter__(self) -> Iterator[tuple[str, Document]]:
        return iter(list(self._read().items()))

    def _read(self) -> dict[str, Document]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise DocumentStoreError(f"Invalid data in {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise DocumentStoreError(f"{self._path} must contain a JSON object")
        return data

    def _write(self, documents: dict[str, Document]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(documents, indent=2), encoding="utf-8")


class DocumentStore:
    """Entry point handing out collections rooted at one directory."""

    def __init__(self, root: Path) -> None:
        self._root = root.expanduser()

    @property
    def root(self) -> Path:
        """Return the directory containing the collection files."""
        return self._root

    def collection(self, name: str) -> Collection:
        """Return the collection called ``name``."""
        if not name or "/" in name or name.startswith("."):
            raise DocumentStoreError(f"Invalid collection name: {name!r}")
        return Collection(self._root / f"{name}.json")


__all__ = [
    "Collection",
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "MissingDocumentError",
]
