"""Image upload handling shared by food entries and user profiles."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from food_diary.domain.images import ImageUpload
from food_diary.services.stores import BlobStore

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


class ImageValidationError(ValueError):
    """Raised when a selected file is not an acceptable image."""


class ImageUploadError(RuntimeError):
    """Raised when an image could not be uploaded to its bucket."""


def validate_image(image: ImageUpload, max_bytes: int = MAX_IMAGE_BYTES) -> None:
    """Reject non-image files and files larger than the limit."""
    if not image.content_type.startswith("image/"):
        raise ImageValidationError("Please select a valid image file.")
    if image.size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ImageValidationError(f"Image size should be less than {limit_mb:g}MB.")


def build_object_name(filename: str, now: datetime | None = None) -> str:
    """Prefix the original filename with a millisecond timestamp."""
    moment = now or datetime.now(tz=UTC)
    return f"{int(moment.timestamp() * 1000)}-{filename}"


def object_name_from_url(url: str, bucket: str) -> str | None:
    """Return the object name referenced by a public URL of the bucket."""
    marker = f"/{bucket}/"
    if marker not in url:
        return None
    remainder = url.split(marker, maxsplit=1)[1]
    object_name = remainder.split("?", maxsplit=1)[0]
    return object_name or None


@dataclass
class BucketImages:
    """Uploads and removes images in a single storage bucket."""

    blob_store: BlobStore
    bucket: str

    def upload(self, image: ImageUpload) -> str:
        """Upload an image and return its public URL."""
        object_name = build_object_name(image.filename)
        try:
            self.blob_store.upload(
                self.bucket, object_name, image.data, image.content_type
            )
            return self.blob_store.get_public_url(self.bucket, object_name)
        except Exception as exc:
            raise ImageUploadError(
                f"Failed to upload {object_name} to {self.bucket}"
            ) from exc

    def remove_quietly(self, url: str) -> bool:
        """Remove the object behind a URL; failures are logged, never raised."""
        if not url:
            return False
        object_name = object_name_from_url(url, self.bucket)
        if object_name is None:
            logger.info(
                "Image URL is outside the bucket, skipping removal",
                extra={"bucket": self.bucket, "url": url},
            )
            return False
        try:
            self.blob_store.remove(self.bucket, [object_name])
        except Exception:
            logger.exception(
                "Failed to remove image",
                extra={"bucket": self.bucket, "object_name": object_name},
            )
            return False
        return True
