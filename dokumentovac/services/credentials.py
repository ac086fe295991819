"""
Credential provider.

Holds the bearer token and the signed-in user's email. Everything else only
reads ``token``/``is_authenticated`` and may subscribe to changes, so a view
can react when the user logs out underneath it.

The session is kept in <config dir>/session.json. DOKUMENTOVAC_TOKEN, when
set, takes precedence over the stored token.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Optional

from ..config.constants import SESSION_FILE_NAME
from ..config.settings import get_config_dir

logger = logging.getLogger(__name__)

CredentialListener = Callable[[Optional[str]], None]


class CredentialProvider:
    """Source of the current authentication token."""

    def __init__(
        self,
        token: Optional[str] = None,
        user: Optional[str] = None,
        *,
        session_path: Optional[Path] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            token: Initial token
            user: Initial user email
            session_path: File to persist the session in; None keeps it in memory
        """
        self._token = token or None
        self._user = user or None
        self._session_path = session_path
        self._listeners: list[CredentialListener] = []

    @classmethod
    def from_session(cls, session_path: Optional[Path] = None) -> CredentialProvider:
        """Load the stored session (or an empty one)."""
        path = session_path or get_config_dir() / SESSION_FILE_NAME
        token = user = None
        if path.exists():
            try:
                data = json.loads(path.read_text())
                token = data.get("access_token")
                user = data.get("user_email")
            except (json.JSONDecodeError, OSError, AttributeError) as e:
                logger.warning("Ignoring unreadable session file %s: %s", path, e)

        env_token = os.environ.get("DOKUMENTOVAC_TOKEN")
        if env_token:
            token = env_token

        return cls(token, user, session_path=path)

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[str]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def login(self, token: str, email: str) -> bool:
        """Store a new session.

        Returns:
            False (and changes nothing) when token or email is empty
        """
        if not token or not email:
            logger.error("Invalid token or email provided to login")
            return False

        self._token = token
        self._user = email
        self._persist()
        logger.info("Logged in as %s", email)
        self._notify()
        return True

    def logout(self) -> None:
        self._token = None
        self._user = None
        self._persist()
        logger.info("Logged out")
        self._notify()

    def subscribe(self, listener: CredentialListener) -> Callable[[], None]:
        """Call ``listener(token)`` after every login/logout.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._token)

    def _persist(self) -> None:
        if self._session_path is None:
            return
        try:
            if self._token is None:
                self._session_path.unlink(missing_ok=True)
                return
            self._session_path.parent.mkdir(parents=True, exist_ok=True)
            self._session_path.write_text(
                json.dumps({"access_token": self._token, "user_email": self._user}, indent=2)
                + "\n"
            )
        except OSError as e:
            logger.warning("Could not write session file %s: %s", self._session_path, e)
