"""
Client-side error taxonomy.

Session-invalidating failures are raised only by the authorized request
layer; everything else is handled where the call is made.
"""
from typing import Any, Optional


class JamiiError(Exception):
    """Base class for dashboard client errors."""
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ApiError(JamiiError):
    """Raised when the remote API answers with a non-success status."""
    def __init__(self, status_code: Optional[int], detail: str, payload: Any = None):
        super().__init__(detail)
        self.status_code = status_code
        self.payload = payload


class NetworkError(ApiError):
    """Raised when a request never produced a response."""
    def __init__(self, detail: str = "Network request failed"):
        super().__init__(status_code=None, detail=detail)


class UnauthorizedError(ApiError):
    """Raised after a 401 has logged the session out."""
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=401, detail=detail)


class AuthenticationError(JamiiError):
    """Raised when the login endpoint rejects the credentials."""
    def __init__(self, detail: str = "Login failed"):
        super().__init__(detail)


class TokenDecodeError(JamiiError):
    """Raised when a bearer token payload cannot be turned into a user."""
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class ClinicScopeError(JamiiError):
    """Raised when an operation needs a selected clinic and there is none."""
    def __init__(self, detail: str = "No clinic selected"):
        super().__init__(detail)
