"""Supabase tables used as document collections."""

from dataclasses import dataclass

from supabase import Client

from food_diary.services.stores import Document, DocumentNotFoundError, DocumentStore


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Supabase implementation where each collection is a table keyed by id."""

    client: Client

    def add(
        self,
        collection: str,
        fields: dict[str, object],
        document_id: str | None = None,
    ) -> str:
        """Insert a row and return its id."""
        payload = dict(fields)
        if document_id is not None:
            payload["id"] = document_id
        response = self.client.table(collection).insert(payload).execute()
        if not response.data:
            raise RuntimeError(f"Failed to add document to {collection}")
        return str(response.data[0]["id"])

    def get(self, collection: str, document_id: str) -> Document | None:
        """Return a row by id, if present."""
        response = (
            self.client.table(collection)
            .select("*")
            .eq("id", document_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_document(response.data[0])

    def get_all(self, collection: str) -> list[Document]:
        """Return every row of the table."""
        response = self.client.table(collection).select("*").execute()
        return [_to_document(row) for row in response.data or []]

    def update(
        self, collection: str, document_id: str, fields: dict[str, object]
    ) -> None:
        """Overwrite columns on an existing row."""
        response = (
            self.client.table(collection)
            .update(fields)
            .eq("id", document_id)
            .execute()
        )
        if not response.data:
            raise DocumentNotFoundError(f"No document {document_id} in {collection}")

    def delete(self, collection: str, document_id: str) -> None:
        """Delete a row by id."""
        self.client.table(collection).delete().eq("id", document_id).execute()

    def query(self, collection: str, field_name: str, value: object) -> list[Document]:
        """Return rows whose column equals the value."""
        response = (
            self.client.table(collection).select("*").eq(field_name, value).execute()
        )
        return [_to_document(row) for row in response.data or []]


def _to_document(row: dict[str, object]) -> Document:
    fields = {key: value for key, value in row.items() if key != "id"}
    return Document(id=str(row["id"]), fields=fields)
