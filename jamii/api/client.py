from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx

from jamii.core.exceptions import ApiError, NetworkError, UnauthorizedError
from jamii.core.logger import logger
from jamii.core.notifications import Notifier
from jamii.core.utils import format_api_error

if TYPE_CHECKING:
    from jamii.services.session_service import SessionStore

SESSION_EXPIRED_TITLE = "Session Expired"
SESSION_EXPIRED_MESSAGE = "You have been logged out. Please sign in again."

class ApiClient:
    """
    Sends every authenticated call to the API.

    Attaches the session's bearer token and turns a 401 into a logout plus a
    single "Session Expired" notice before raising ``UnauthorizedError``.
    Calls are never retried or queued.
    """

    def __init__(self, http: httpx.AsyncClient, session: "SessionStore", notifier: Notifier):
        self.http = http
        self.session = session
        self.notifier = notifier

    def build_headers(self, headers: Optional[Dict[str, str]] = None, form: bool = False) -> httpx.Headers:
        merged = httpx.Headers(headers or {})
        token = self.session.get_token()
        if token:
            merged["Authorization"] = f"Bearer {token}"
        if "Content-Type" not in merged and not form:
            merged["Content-Type"] = "application/json"
        return merged

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        content: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        token = self.session.get_token()
        request_headers = self.build_headers(headers, form=files is not None or data is not None)

        try:
            response = await self.http.request(
                method,
                endpoint,
                headers=request_headers,
                json=json,
                content=content,
                data=data,
                files=files,
                params=params,
            )
        except httpx.TransportError as exc:
            logger.warning(f"Request to {endpoint} failed: {exc!r}")
            raise NetworkError(f"Could not reach the server: {exc}") from exc

        if response.status_code == 401:
            # Only the session that sent the request may be ended by its 401
            if self.session.get_token() == token:
                self.notifier.notify(SESSION_EXPIRED_TITLE, SESSION_EXPIRED_MESSAGE, variant="destructive")
                self.session.logout(reason="session expired")
            else:
                logger.info(f"Ignoring 401 from {endpoint} sent by a previous session")
            raise UnauthorizedError()

        return response

    async def request_json(self, endpoint: str, method: str = "GET", fallback: str = "Request failed.", **kwargs) -> Any:
        response = await self.request(endpoint, method=method, **kwargs)
        if not response.is_success:
            payload = read_json(response)
            raise ApiError(response.status_code, format_api_error(payload, fallback), payload)
        if response.status_code == 204 or not response.content:
            return None
        return read_json(response)

def read_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
