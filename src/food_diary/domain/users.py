"""Domain models for users and their cached session snapshot."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel


class Gender(str, Enum):
    """Gender options offered at registration."""

    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class Registration:
    """Fields submitted by the registration form."""

    full_name: str
    email: str
    password: str
    gender: Gender


@dataclass(frozen=True)
class ProfileChanges:
    """Fields submitted by the profile form."""

    full_name: str
    email: str
    gender: Gender
    password: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Represents a user document; the id is the registration email."""

    id: str
    full_name: str
    email: str
    gender: Gender | None
    password: str
    image_url: str = ""


class SessionUser(BaseModel):
    """Profile snapshot kept client-side after a successful login."""

    id: str
    fullname: str = ""
    email: str = ""
    gender: str = ""
    user_image_url: str = ""

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "SessionUser":
        """Build the snapshot for a stored profile."""
        return cls(
            id=profile.id,
            fullname=profile.full_name,
            email=profile.email,
            gender=profile.gender.value if profile.gender else "",
            user_image_url=profile.image_url,
        )
