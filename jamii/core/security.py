import json
import time
from typing import Optional

from jwt.utils import base64url_decode
from pydantic import ValidationError

from jamii.core.config import Settings, settings as default_settings
from jamii.core.exceptions import TokenDecodeError
from jamii.schemas.auth import TokenClaims, User

# NOTE: The payload is read without verifying the signature. The decoded
# claims only drive display and routing; the API validates every bearer
# token on its own.

def decode_token_claims(token: Optional[str], check_expiry: bool = True, now: Optional[float] = None) -> TokenClaims:
    if not token or not isinstance(token, str):
        raise TokenDecodeError("Token is missing")

    segments = token.split(".")
    if len(segments) != 3 or not segments[1]:
        raise TokenDecodeError("Token must have three segments")

    try:
        raw = base64url_decode(segments[1].encode("ascii"))
        payload = json.loads(raw)
    except (ValueError, UnicodeError) as exc:
        raise TokenDecodeError("Token payload is not base64url JSON") from exc

    if not isinstance(payload, dict):
        raise TokenDecodeError("Token payload is not an object")

    try:
        claims = TokenClaims.model_validate(payload)
    except ValidationError as exc:
        raise TokenDecodeError("Token payload is missing required claims") from exc

    if check_expiry and claims.exp is not None:
        current = time.time() if now is None else now
        if claims.exp <= current:
            raise TokenDecodeError("Token has expired")

    return claims


def user_from_token(
    token: Optional[str],
    reset_initial_password: bool = False,
    settings: Optional[Settings] = None,
) -> User:
    settings = settings or default_settings
    claims = decode_token_claims(token, check_expiry=settings.CHECK_TOKEN_EXPIRY)
    return User(
        id=claims.user_id,
        name=claims.name,
        email=claims.email,
        role=claims.role,
        avatar_url=settings.AVATAR_PLACEHOLDER_URL,
        reset_initial_password=reset_initial_password,
    )
