"""Interfaces for the remote document and blob stores."""

from dataclasses import dataclass, field
from typing import Protocol


class DocumentNotFoundError(LookupError):
    """Raised when an update targets a document that does not exist."""


@dataclass(frozen=True)
class Document:
    """A stored document: its key plus its fields."""

    id: str
    fields: dict[str, object] = field(default_factory=dict)


class DocumentStore(Protocol):
    """Persistence interface for collections of JSON-like documents."""

    def add(
        self,
        collection: str,
        fields: dict[str, object],
        document_id: str | None = None,
    ) -> str:
        """Insert a document and return its id."""

    def get(self, collection: str, document_id: str) -> Document | None:
        """Return a document by id, if present."""

    def get_all(self, collection: str) -> list[Document]:
        """Return every document in a collection."""

    def update(
        self, collection: str, document_id: str, fields: dict[str, object]
    ) -> None:
        """Overwrite the given fields on an existing document."""

    def delete(self, collection: str, document_id: str) -> None:
        """Delete a document by id."""

    def query(self, collection: str, field_name: str, value: object) -> list[Document]:
        """Return documents whose field equals the value."""


class BlobStore(Protocol):
    """Interface for object storage buckets."""

    def upload(
        self, bucket: str, object_name: str, data: bytes, content_type: str
    ) -> None:
        """Upload an object under the given name."""

    def get_public_url(self, bucket: str, object_name: str) -> str:
        """Return the public URL for an object."""

    def remove(self, bucket: str, object_names: list[str]) -> None:
        """Remove objects from a bucket."""
