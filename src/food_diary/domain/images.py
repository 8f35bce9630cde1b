"""Models for uploaded images."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageUpload:
    """An image file received from a form, already read into memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        """Return the payload size in bytes."""
        return len(self.data)
