# app/core/auth/security.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from app.config import settings
from app.core.errors import AuthenticationError, ForbiddenError

from .schemas import TokenData

log = logging.getLogger(__name__)

# auto_error=False so a missing header reaches our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)

MISSING_HEADER = "Missing or invalid authorization header"
INVALID_TOKEN = "Invalid or expired token"
ADMIN_ONLY = "Admin access only"


# --- JWT helpers ---

def create_access_token(user_id: int, role: str = "user", expires_delta: timedelta | None = None) -> str:
    """
    Creates a signed access token.

    Args:
        user_id (int): Stored in the 'sub' claim.
        role (str): Stored in the 'role' claim.
        expires_delta (timedelta | None): Lifetime; settings default if None.

    Returns:
        str: Encoded JWT.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    log.debug("Created JWT token for sub: %s", user_id)
    return encoded_jwt


def decode_access_token(token: str) -> TokenData:
    """
    Verifies a token and returns its claims.

    Raises:
        AuthenticationError: bad signature, expired, or malformed claims.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        sub: Optional[str] = payload.get("sub")
        if sub is None:
            log.warning("Token verification failed: 'sub' claim missing.")
            raise AuthenticationError(INVALID_TOKEN)
        token_data = TokenData(user_id=int(sub), role=payload.get("role") or "user")
    except JWTError as e:
        log.warning("Token verification failed: JWTError - %s", e)
        raise AuthenticationError(INVALID_TOKEN) from e
    except (ValidationError, ValueError) as e:
        log.warning("Token verification failed: bad claims - %s", e)
        raise AuthenticationError(INVALID_TOKEN) from e
    return token_data


# --- FastAPI dependencies ---

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    """Claims of the bearer token on the request; 401 when absent or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(MISSING_HEADER)
    return decode_access_token(credentials.credentials)


async def require_admin(current_user: TokenData = Depends(get_current_user)) -> TokenData:
    if not current_user.is_admin:
        log.warning("User %s (role=%s) denied admin route", current_user.user_id, current_user.role)
        raise ForbiddenError(ADMIN_ONLY)
    return current_user
