from typing import Callable, List, Optional

import httpx
from pydantic import ValidationError

from jamii.api import endpoints
from jamii.api.client import read_json
from jamii.core.config import Settings, settings as default_settings
from jamii.core.exceptions import AuthenticationError, NetworkError, TokenDecodeError
from jamii.core.logger import logger
from jamii.core.security import user_from_token
from jamii.core.storage import ClientStorage
from jamii.schemas.auth import LoginRequest, LoginResponse, User, UserDetails

SessionListener = Callable[[Optional[User]], None]

class SessionStore:
    """
    Single source of truth for who is logged in.

    ``token`` and ``user`` always change together: the user is decoded from
    the token, so either both are set or both are ``None``.
    """

    def __init__(self, http: httpx.AsyncClient, storage: ClientStorage, settings: Optional[Settings] = None):
        self.http = http
        self.storage = storage
        self.settings = settings or default_settings
        self.token: Optional[str] = None
        self.user: Optional[User] = None
        self.is_loading = True
        self._initialized = False
        self._listeners: List[SessionListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self):
        for listener in list(self._listeners):
            listener(self.user)

    def _reset_flag(self) -> bool:
        return self.storage.get_item(self.settings.RESET_PASSWORD_STORAGE_KEY) == "true"

    def initialize(self) -> Optional[User]:
        if self._initialized:
            return self.user
        self._initialized = True

        try:
            stored_token = self.storage.get_item(self.settings.TOKEN_STORAGE_KEY)
            if stored_token:
                try:
                    user = user_from_token(stored_token, self._reset_flag(), self.settings)
                except TokenDecodeError as exc:
                    # Bad tokens heal silently: forget them and start logged out
                    logger.info(f"Discarding stored token: {exc.detail}")
                    self.storage.remove_item(self.settings.TOKEN_STORAGE_KEY)
                    self.storage.remove_item(self.settings.RESET_PASSWORD_STORAGE_KEY)
                else:
                    self.token = stored_token
                    self.user = user
                    logger.info(f"Restored session for user {user.id} ({user.role.value})")
        finally:
            self.is_loading = False

        self._emit()
        return self.user

    async def login(self, email: str, password: str) -> User:
        credentials = LoginRequest(email=email, password=password)
        try:
            response = await self.http.post(endpoints.LOGIN, json=credentials.model_dump())
        except httpx.TransportError as exc:
            raise NetworkError(f"Could not reach the server: {exc}") from exc

        if not response.is_success:
            payload = read_json(response)
            detail = payload.get("detail") if isinstance(payload, dict) else None
            logger.info(f"Login rejected for {email} (status {response.status_code})")
            raise AuthenticationError(detail if isinstance(detail, str) and detail else "Login failed")

        try:
            data = LoginResponse.model_validate(read_json(response))
            user = user_from_token(data.access, data.reset_initial_password, self.settings)
        except (ValidationError, TokenDecodeError) as exc:
            logger.warning(f"Login for {email} returned an unusable token")
            raise AuthenticationError("Login failed") from exc

        # 1. Persist
        self.storage.set_item(self.settings.TOKEN_STORAGE_KEY, data.access)
        if data.reset_initial_password:
            self.storage.set_item(self.settings.RESET_PASSWORD_STORAGE_KEY, "true")
        else:
            self.storage.remove_item(self.settings.RESET_PASSWORD_STORAGE_KEY)

        # 2. Swap state in one step
        self.token, self.user = data.access, user
        self.is_loading = False
        self._initialized = True
        logger.info(f"User {user.id} logged in as {user.role.value}")

        self._emit()
        return user

    def logout(self, reason: str = "logout") -> None:
        had_session = self.token is not None or self.user is not None
        self.token = None
        self.user = None
        self.storage.remove_item(self.settings.TOKEN_STORAGE_KEY)
        self.storage.remove_item(self.settings.RESET_PASSWORD_STORAGE_KEY)

        if had_session:
            logger.info(f"Session cleared ({reason})")
            self._emit()

    def get_token(self) -> Optional[str]:
        return self.token

    def mark_password_changed(self) -> None:
        self.storage.remove_item(self.settings.RESET_PASSWORD_STORAGE_KEY)
        if self.user is not None and self.user.reset_initial_password:
            self.user = self.user.model_copy(update={"reset_initial_password": False})
            self._emit()

    async def refresh_user(self) -> Optional[User]:
        token = self.token
        if not token or self.user is None:
            return None

        try:
            response = await self.http.get(
                endpoints.CURRENT_USER,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TransportError as exc:
            logger.warning(f"Could not refresh user details: {exc!r}")
            return self.user

        if not response.is_success:
            logger.info(f"User details unavailable (status {response.status_code})")
            return self.user

        try:
            details = UserDetails.model_validate(read_json(response) or {})
        except ValidationError:
            logger.warning("Ignoring malformed user details")
            return self.user

        # The session may have changed while we waited
        if self.token != token or self.user is None:
            return self.user

        update = {"specialty": details.specialty}
        if details.name:
            update["name"] = details.name
        self.user = self.user.model_copy(update=update)
        self._emit()
        return self.user
