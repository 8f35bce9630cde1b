"""User registration and profile management."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from food_diary.domain.images import ImageUpload
from food_diary.domain.users import Gender, ProfileChanges, Registration, UserProfile
from food_diary.services.images import BucketImages
from food_diary.services.stores import Document, DocumentStore

logger = logging.getLogger(__name__)


class UserWriteError(RuntimeError):
    """Raised when a user document could not be written."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    documents: DocumentStore
    images: BucketImages
    collection: str = "users"

    def register(self, registration: Registration, image: ImageUpload | None) -> str:
        """Upload the optional avatar, then add the user keyed by email."""
        image_url = self.images.upload(image) if image else ""
        now = datetime.now(tz=UTC).isoformat()
        try:
            user_id = self.documents.add(
                self.collection,
                {
                    "fullname": registration.full_name,
                    "email": registration.email,
                    "password": registration.password,
                    "gender": registration.gender.value,
                    "user_image_url": image_url,
                    "created_at": now,
                    "updated_at": now,
                },
                document_id=registration.email,
            )
        except Exception as exc:
            raise UserWriteError(f"Failed to register {registration.email}") from exc
        logger.info("User registered", extra={"user_id": user_id})
        return user_id

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user id."""
        document = self.documents.get(self.collection, user_id)
        if document is None:
            return None
        return parse_user(document)

    def update_profile(
        self,
        profile: UserProfile,
        changes: ProfileChanges,
        image: ImageUpload | None,
    ) -> UserProfile:
        """Replace the avatar if a new one is given and save profile fields.

        The old avatar is removed before the new upload; a failed removal is
        ignored. The password is only overwritten when a new one is supplied.
        """
        image_url = profile.image_url
        if image:
            self.images.remove_quietly(profile.image_url)
            image_url = self.images.upload(image)
        fields: dict[str, object] = {
            "email": changes.email,
            "fullname": changes.full_name,
            "gender": changes.gender.value,
            "user_image_url": image_url,
        }
        if changes.password:
            fields["password"] = changes.password
        try:
            self.documents.update(self.collection, profile.id, fields)
        except Exception as exc:
            raise UserWriteError(f"Failed to update profile {profile.id}") from exc
        return UserProfile(
            id=profile.id,
            full_name=changes.full_name,
            email=changes.email,
            gender=changes.gender,
            password=changes.password or profile.password,
            image_url=image_url,
        )


def parse_gender(value: object) -> Gender | None:
    """Map a stored gender string to the enum, logging unknown values."""
    if value is None or value == "":
        return None
    try:
        return Gender(str(value))
    except ValueError:
        logger.warning("Unrecognized gender value", extra={"gender": value})
        return None


def parse_user(document: Document) -> UserProfile:
    """Build a profile from a user document."""
    fields = document.fields
    return UserProfile(
        id=document.id,
        full_name=str(fields.get("fullname") or ""),
        email=str(fields.get("email") or ""),
        gender=parse_gender(fields.get("gender")),
        password=str(fields.get("password") or ""),
        image_url=str(fields.get("user_image_url") or ""),
    )
