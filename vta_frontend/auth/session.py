"""Process-wide session context holding the backend bearer token."""
from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping

from ..config import StorageSettings
from ..exceptions import BackendError, FrontendError, ValidationError
from ..infrastructure.http import BackendClient
from .constants import (
    ADMIN_LOGIN_FAILED,
    ADMIN_TOKEN_PATH,
    AUTHENTICATION_FAILED,
    MISSING_ACCESS_TOKEN,
    REGISTER_PATH,
    REGISTRATION_FAILED,
    USER_TOKEN_PATH,
)
from .exceptions import AuthenticationError, NotLoggedInError
from .schemas import RegisterRequest, TokenResponse

LOGGER = logging.getLogger(__name__)

TeardownCallback = Callable[[], None]


class SessionStore:
    """Persist a single opaque token under a fixed storage key.

    ``storage`` stands in for the browser's local storage: the token found
    there at construction time is adopted (app start), ``login`` writes it and
    ``logout`` removes it again. Components holding data that belongs to the
    logged-in user register a teardown callback so that logging out clears
    them as well.

    The end-user store collapses every failure into a generic
    "Authentication failed"; the admin store passes the backend's error
    detail through when one is provided.
    """

    def __init__(
        self,
        client: BackendClient,
        storage: MutableMapping[str, str],
        *,
        storage_key: str,
        token_path: str = USER_TOKEN_PATH,
        failure_message: str = AUTHENTICATION_FAILED,
        surface_detail: bool = False,
    ) -> None:
        self._client = client
        self._storage = storage
        self._storage_key = storage_key
        self._token_path = token_path
        self._failure_message = failure_message
        self._surface_detail = surface_detail
        self._teardown: list[TeardownCallback] = []
        stored = storage.get(storage_key)
        self._token: str | None = stored or None

    @classmethod
    def for_user(
        cls, client: BackendClient, storage: MutableMapping[str, str], settings: StorageSettings
    ) -> "SessionStore":
        return cls(client, storage, storage_key=settings.user_token_key)

    @classmethod
    def for_admin(
        cls, client: BackendClient, storage: MutableMapping[str, str], settings: StorageSettings
    ) -> "SessionStore":
        return cls(
            client,
            storage,
            storage_key=settings.admin_token_key,
            token_path=ADMIN_TOKEN_PATH,
            failure_message=ADMIN_LOGIN_FAILED,
            surface_detail=True,
        )

    @property
    def client(self) -> BackendClient:
        return self._client

    @property
    def storage(self) -> MutableMapping[str, str]:
        return self._storage

    @property
    def is_logged_in(self) -> bool:
        return self._token is not None

    def current_token(self) -> str | None:
        return self._token

    def require_token(self) -> str:
        if self._token is None:
            raise NotLoggedInError("Please log in or register to use the chatbot.")
        return self._token

    def on_logout(self, callback: TeardownCallback) -> None:
        self._teardown.append(callback)

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer token and persist it."""

        self._validate_credentials(email, password)
        try:
            payload = await self._client.post_form(self._token_path, {"username": email, "password": password})
        except FrontendError as exc:
            LOGGER.warning("Login failed | path=%s error=%s", self._token_path, exc)
            raise AuthenticationError(self._failure_detail(exc)) from exc

        token = TokenResponse.model_validate(payload).access_token
        if not token:
            raise AuthenticationError(MISSING_ACCESS_TOKEN)

        self._storage[self._storage_key] = token
        self._token = token
        LOGGER.info("Login succeeded | key=%s", self._storage_key)
        return token

    async def register(self, email: str, password: str) -> str:
        """Create an account and log in with the same credentials."""

        self._validate_credentials(email, password)
        request = RegisterRequest(username=email, email=email, password=password)
        try:
            await self._client.post_json(REGISTER_PATH, request.model_dump())
        except FrontendError as exc:
            LOGGER.warning("Registration failed | error=%s", exc)
            raise AuthenticationError(REGISTRATION_FAILED) from exc
        return await self.login(email, password)

    def logout(self) -> None:
        """Drop the token and every cache that depends on it."""

        self._storage.pop(self._storage_key, None)
        self._token = None
        for callback in self._teardown:
            callback()
        LOGGER.info("Logged out | key=%s", self._storage_key)

    def _failure_detail(self, exc: FrontendError) -> str:
        if self._surface_detail and isinstance(exc, BackendError) and exc.detail:
            return exc.detail
        return self._failure_message

    @staticmethod
    def _validate_credentials(email: str, password: str) -> None:
        if not (email or "").strip() or not password:
            raise ValidationError("Please enter your email and password.")


__all__ = ["SessionStore", "TeardownCallback"]
