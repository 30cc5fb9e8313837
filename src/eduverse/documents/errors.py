"""Document store errors."""


class DocumentStoreError(Exception):
    """Base exception for document store operations."""


class MissingDocumentError(DocumentStoreError):
    """Raised when a document is updated or read but does not exist."""
