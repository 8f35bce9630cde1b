"""Helpers for multipart form input."""

from fastapi import UploadFile

from food_diary.domain.images import ImageUpload
from food_diary.services.images import MAX_IMAGE_BYTES, validate_image


async def read_image(
    upload: UploadFile | None, max_bytes: int = MAX_IMAGE_BYTES
) -> ImageUpload | None:
    """Read and validate an optional image field.

    An empty file input arrives as an upload without a filename and is
    treated as "no image".
    """
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    image = ImageUpload(
        filename=upload.filename,
        content_type=upload.content_type or "",
        data=data,
    )
    validate_image(image, max_bytes)
    return image
