"""
Request authentication.

Access tokens are issued by the hosted identity provider and signed with the
project's JWT secret (HS256). The token subject is the auth user id that
restaurants, staff records and profiles refer to.
"""

from typing import Optional, Dict, Any
import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import BaseModel

from .config import settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

security = HTTPBearer(auto_error=False)


class AuthUser(BaseModel):
    """Authenticated caller resolved from an access token"""

    id: str
    email: Optional[str] = None
    role: Optional[str] = None
    user_metadata: Dict[str, Any] = {}


def verify_token(token: str) -> Optional[AuthUser]:
    """
    Verify and decode a provider access token.

    Returns:
        AuthUser if valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[ALGORITHM],
            audience=settings.supabase_jwt_audience,
            options={"require_exp": True, "require_sub": True},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        return None
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    sub = payload.get("sub")
    if not sub:
        return None

    return AuthUser(
        id=str(sub),
        email=payload.get("email"),
        role=payload.get("role"),
        user_metadata=payload.get("user_metadata") or {},
    )


def _credentials_exception() -> AuthenticationError:
    exc = AuthenticationError("Could not validate credentials")
    exc.headers = {"WWW-Authenticate": "Bearer"}
    return exc


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """Resolve the authenticated caller or reject the request with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _credentials_exception()

    user = verify_token(credentials.credentials)
    if user is None:
        raise _credentials_exception()
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthUser]:
    """Resolve the caller when a valid token is present, otherwise None."""
    if credentials is None:
        return None
    return verify_token(credentials.credentials)
