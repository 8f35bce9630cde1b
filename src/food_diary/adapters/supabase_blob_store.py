"""Supabase Storage buckets used as the blob store."""

from dataclasses import dataclass

from supabase import Client

from food_diary.services.stores import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Supabase Storage implementation for image objects."""

    client: Client

    def upload(
        self, bucket: str, object_name: str, data: bytes, content_type: str
    ) -> None:
        """Upload bytes to the bucket under the object name."""
        self.client.storage.from_(bucket).upload(
            path=object_name,
            file=data,
            file_options={"content-type": content_type},
        )

    def get_public_url(self, bucket: str, object_name: str) -> str:
        """Return the public URL of an object."""
        return self.client.storage.from_(bucket).get_public_url(object_name)

    def remove(self, bucket: str, object_names: list[str]) -> None:
        """Remove objects from the bucket."""
        self.client.storage.from_(bucket).remove(object_names)
