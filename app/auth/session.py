import logging
from typing import Optional

from fastapi import Cookie, Depends, Header

from app.core.errors import ErrorCode, raise_error
from app.models.user_schema import SessionUser
from app.services.identity import (
    IdentityProviderError,
    SupabaseIdentityProvider,
    get_identity_provider,
)

logger = logging.getLogger(__name__)

SESSION_COOKIE = "sb-access-token"


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session_user(
    authorization: Optional[str] = Header(None),
    access_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    identity: SupabaseIdentityProvider = Depends(get_identity_provider),
) -> SessionUser:
    """Authenticated caller, confirmed or not. Rejects before any datastore or DNS access."""
    token = _bearer_token(authorization) or access_token
    if not token:
        raise_error(ErrorCode.PERMISSION_DENIED, status_code=401)

    try:
        user = await identity.get_user(token)
    except IdentityProviderError as exc:
        logger.error(f"Session lookup failed: {exc}")
        raise_error(ErrorCode.AUTH_UNAVAILABLE, status_code=503)

    if user is None or not user.id:
        raise_error(ErrorCode.PERMISSION_DENIED, status_code=401)
    return user


def require_confirmed(user: SessionUser):
    if not user.is_confirmed:
        raise_error(ErrorCode.PERMISSION_DENIED, status_code=401)
