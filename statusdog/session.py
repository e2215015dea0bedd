# statusdog/session.py
"""Authentication state and the screen it leads to."""

from __future__ import annotations

import enum
import logging

from .api_client import AuthClient
from .errors import AuthError, StorageError, ValidationError
from .storage import TOKEN_KEY, LocalStorage

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class Route(enum.Enum):
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"


class SessionController:
    """
    Owns the auth token. The token is read from local storage at startup and is considered
    valid until the backend rejects it.

    `epoch` changes on every login and logout; a caller that captured it before a remote call
    can tell whether the session it was working for is still the active one.
    """

    def __init__(self, storage: LocalStorage, auth_client: AuthClient):
        self._storage = storage
        self._auth_client = auth_client
        stored = storage.get(TOKEN_KEY)
        self._token: str | None = stored if isinstance(stored, str) and stored else None
        self.epoch = 0
        self.state = SessionState.AUTHENTICATED if self._token else SessionState.ANONYMOUS

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def require_token(self) -> str:
        token = self.token
        if not token:
            raise AuthError("You are not logged in.")
        return token

    def is_current(self, epoch: int) -> bool:
        return epoch == self.epoch

    def home_route(self) -> Route:
        return Route.DASHBOARD if self.is_authenticated else Route.LOGIN

    def login(self, email: str, password: str) -> Route:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required.")

        self.state = SessionState.AUTHENTICATING
        try:
            token = self._auth_client.login(email, password)
        except Exception:
            self.state = SessionState.ANONYMOUS
            raise
        self._token = token
        # A failed write still leaves the session usable for this run
        self._storage.writer(TOKEN_KEY)(token)
        self.state = SessionState.AUTHENTICATED
        self.epoch += 1
        logger.info(f"User {email} logged in.")
        return Route.DASHBOARD

    def register(self, name: str, email: str, password: str) -> Route:
        name, email = (name or "").strip(), (email or "").strip()
        if not all([name, email, password]):
            raise ValidationError("Name, email and password are required.")
        self._auth_client.register(name, email, password)
        logger.info(f"Account created for {email}.")
        return Route.LOGIN

    def logout(self) -> Route:
        self._token = None
        try:
            self._storage.remove(TOKEN_KEY)
        except StorageError as e:
            logger.warning(f"Could not remove the stored token: {e}")
        self.state = SessionState.ANONYMOUS
        self.epoch += 1
        logger.info("User logged out.")
        return Route.LOGIN
