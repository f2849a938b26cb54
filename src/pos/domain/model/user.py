"""Identity of the signed-in user, as handed out by the auth collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pos.domain.exceptions import UnauthenticatedError


@dataclass(frozen=True)
class UserIdentity:
    uid: str
    email: str = ""
    display_name: str = ""


class AuthProvider(ABC):

    @abstractmethod
    def current_user(self) -> UserIdentity | None:
        """Return the signed-in user, or None."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> UserIdentity:
        """Start a session and return its identity."""

    @abstractmethod
    def sign_out(self) -> None:
        """End the current session."""


def require_user(auth: AuthProvider) -> UserIdentity:
    """Return the current identity or raise UnauthenticatedError."""
    user = auth.current_user()
    if user is None:
        raise UnauthenticatedError("You must be signed in to do that")
    return user
