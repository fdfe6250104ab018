"""Auth gate: resolve the user id from an ``Authorization: Bearer <token>`` header."""
from typing import Annotated

from fastapi import Depends, Header

from typetester.core.config import Settings, get_settings
from typetester.core.errors import AuthError
from typetester.core.security import decode_access_token

BEARER_PREFIX = "Bearer "


def bearer_token(authorization: str | None) -> str | None:
    """Return the token part of a Bearer header, or None if absent or malformed."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):]


def _resolve_user_id(authorization: str | None, settings: Settings) -> int | None:
    token = bearer_token(authorization)
    if token is None:
        return None
    return decode_access_token(token, settings.secret_key, algorithm=settings.algorithm)


def get_current_user_id(
    settings: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> int:
    """Mandatory auth. Missing and invalid tokens get the same 401."""
    user_id = _resolve_user_id(authorization, settings)
    if user_id is None:
        raise AuthError()
    return user_id


def get_optional_user_id(
    settings: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> int | None:
    """Optional auth. An invalid token is ignored and the caller stays anonymous."""
    return _resolve_user_id(authorization, settings)
