"""Credential checks for logging in."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from food_diary.domain.users import SessionUser
from food_diary.services.stores import DocumentStore
from food_diary.services.users import parse_user

logger = logging.getLogger(__name__)


class CredentialVerifier(Protocol):
    """Compares a submitted password with the stored credential."""

    def verify(self, submitted: str, stored: str) -> bool:
        """Return true when the submitted password matches."""


@dataclass
class PlaintextCredentialVerifier(CredentialVerifier):
    """Exact comparison against a password stored as plain text."""

    def verify(self, submitted: str, stored: str) -> bool:
        """Return true when both strings are identical."""
        return submitted == stored


@dataclass
class AuthService:
    """Looks up users by email and verifies their password."""

    documents: DocumentStore
    collection: str = "users"
    verifier: CredentialVerifier = field(default_factory=PlaintextCredentialVerifier)

    def login(self, email: str, password: str) -> SessionUser | None:
        """Return the session snapshot for valid credentials, else None."""
        matches = self.documents.query(self.collection, "email", email)
        if not matches:
            logger.info("Login rejected: unknown email")
            return None
        profile = parse_user(matches[0])
        if not self.verifier.verify(password, profile.password):
            logger.info("Login rejected: password mismatch")
            return None
        return SessionUser.from_profile(profile)
