"""
Bearer token authentication.

Tokens are HS256 JWTs signed with the configured secret. The owner id is
read from the ``id`` claim, falling back to ``sub``.
"""

from datetime import datetime, timedelta
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from billbook.config import bind_request_context, get_logger, get_settings
from billbook.core.exceptions import AuthenticationError

logger = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def create_access_token(owner_id: int, expires_delta: timedelta | None = None) -> str:
    """Sign an access token for an owner."""
    auth = get_settings().auth
    if expires_delta is None:
        expires_delta = timedelta(minutes=auth.token_expire_minutes)

    to_encode: dict[str, Any] = {
        "id": owner_id,
        "sub": str(owner_id),
        "exp": datetime.utcnow() + expires_delta,
    }
    return jwt.encode(to_encode, auth.secret_key, algorithm=auth.algorithm)


def decode_owner_id(token: str) -> int:
    """
    Verify a token and return the owner id it carries.

    Raises:
        AuthenticationError: bad signature, expired, or no usable id claim
    """
    auth = get_settings().auth
    try:
        payload = jwt.decode(token, auth.secret_key, algorithms=[auth.algorithm])
    except JWTError as e:
        logger.warning("token_rejected", reason=str(e))
        raise AuthenticationError("Token missing or invalid") from e

    raw = payload.get("id", payload.get("sub"))
    if raw is None or isinstance(raw, bool):
        raise AuthenticationError("Token has no owner id")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Token has no owner id") from e


async def get_current_owner_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> int:
    """Resolve the authenticated owner id for a request."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token missing or invalid")
    owner_id = decode_owner_id(credentials.credentials)
    bind_request_context(owner_id=owner_id)
    return owner_id
