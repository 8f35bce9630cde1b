"""Client-side session snapshot and the gate protecting screens."""

import base64
from dataclasses import dataclass

from food_diary.domain.users import SessionUser


@dataclass(frozen=True)
class Authenticated:
    """Gate result carrying the cached profile snapshot."""

    user: SessionUser


@dataclass(frozen=True)
class Unauthenticated:
    """Gate result when no usable session is present."""

    reason: str


SessionState = Authenticated | Unauthenticated


def encode_session(user: SessionUser) -> str:
    """Serialize a snapshot into a cookie-safe string."""
    raw = user.model_dump_json().encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_session(value: str) -> SessionUser:
    """Parse a cookie value produced by encode_session."""
    padded = value + "=" * (-len(value) % 4)
    raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    return SessionUser.model_validate_json(raw)


def check_session(value: str | None) -> SessionState:
    """Return whether the stored snapshot identifies a logged-in user."""
    if not value:
        return Unauthenticated(reason="missing")
    try:
        user = decode_session(value)
    except ValueError:
        return Unauthenticated(reason="malformed")
    if not user.id:
        return Unauthenticated(reason="malformed")
    return Authenticated(user=user)
