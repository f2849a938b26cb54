"""Authentication collaborator backed by the configured shop user.

There is no password check: the CLI runs as whoever ``pos.ini`` names.
"""

from __future__ import annotations

import logging

from pos.domain.exceptions import UnauthenticatedError
from pos.domain.model.user import AuthProvider, UserIdentity

logger = logging.getLogger(__name__)


class ConfigAuthProvider(AuthProvider):

    def __init__(self, user: UserIdentity | None) -> None:
        self._configured = user
        self._current = user

    def current_user(self) -> UserIdentity | None:
        return self._current

    def sign_in(self, email: str, password: str) -> UserIdentity:
        if self._configured is None or email.lower() != self._configured.email.lower():
            raise UnauthenticatedError(f"Unknown user '{email}'")
        self._current = self._configured
        logger.info("Signed in as %s", self._current.uid)
        return self._current

    def sign_out(self) -> None:
        if self._current is not None:
            logger.info("Signed out %s", self._current.uid)
        self._current = None
