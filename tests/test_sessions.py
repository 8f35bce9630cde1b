"""Tests for the session snapshot and gate."""

import base64

from food_diary.domain.users import SessionUser
from food_diary.services.sessions import (
    Authenticated,
    Unauthenticated,
    check_session,
    decode_session,
    encode_session,
)


def test_encoded_session_is_cookie_safe() -> None:
    user = SessionUser(id="a@b.com", fullname="Ann, \"Example\"", email="a@b.com")

    value = encode_session(user)

    assert set(value) <= set(
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
    )
    assert decode_session(value) == user


def test_check_session_accepts_snapshot() -> None:
    user = SessionUser(id="a@b.com", email="a@b.com")

    state = check_session(encode_session(user))

    assert state == Authenticated(user=user)


def test_check_session_without_cookie() -> None:
    assert check_session(None) == Unauthenticated(reason="missing")
    assert check_session("") == Unauthenticated(reason="missing")


def test_check_session_with_garbage() -> None:
    assert isinstance(check_session("not base64 at all!"), Unauthenticated)
    assert isinstance(check_session("e30"), Unauthenticated)


def test_check_session_requires_user_id() -> None:
    raw = base64.urlsafe_b64encode(b'{"id": ""}').decode("ascii")

    assert check_session(raw) == Unauthenticated(reason="malformed")
