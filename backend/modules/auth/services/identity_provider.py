# backend/modules/auth/services/identity_provider.py

"""
Thin wrapper around the hosted identity provider's auth API.

Every call goes through a fresh client that does not persist or refresh
sessions, so one user's sign-in never leaks into another request. Provider
exceptions are converted to ``IdentityProviderError`` carrying the provider's
message.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from supabase import Client, ClientOptions, create_client

from core.config import Settings, settings as app_settings

logger = logging.getLogger(__name__)


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects a request or cannot be reached"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class IdentityUser:
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class IdentitySession:
    user: IdentityUser
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


def _to_user(user) -> Optional[IdentityUser]:
    if user is None:
        return None
    return IdentityUser(
        id=str(user.id),
        email=user.email,
        user_metadata=dict(user.user_metadata or {}),
    )


def _error_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


class IdentityProvider:
    def __init__(self, config: Optional[Settings] = None):
        self.config = config or app_settings

    def _client(self) -> Client:
        if not self.config.identity_provider_configured:
            raise IdentityProviderError("Identity provider is not configured")
        return create_client(
            self.config.supabase_url,
            self.config.supabase_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )

    def sign_up(
        self, email: str, password: str, redirect_to: str, metadata: Dict[str, Any]
    ) -> Optional[IdentityUser]:
        try:
            response = self._client().auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"email_redirect_to": redirect_to, "data": metadata},
                }
            )
        except IdentityProviderError:
            raise
        except Exception as e:
            logger.error(f"Sign up rejected by identity provider: {_error_message(e)}")
            raise IdentityProviderError(_error_message(e)) from e
        return _to_user(response.user)

    def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        try:
            response = self._client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except IdentityProviderError:
            raise
        except Exception as e:
            logger.warning(f"Sign in rejected by identity provider: {_error_message(e)}")
            raise IdentityProviderError(_error_message(e)) from e

        if response.session is None:
            raise IdentityProviderError("No session returned")
        return IdentitySession(
            user=_to_user(response.user),
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            expires_in=response.session.expires_in,
        )

    def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        try:
            self._client().auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except IdentityProviderError:
            raise
        except Exception as e:
            logger.error(f"Password reset rejected by identity provider: {_error_message(e)}")
            raise IdentityProviderError(_error_message(e)) from e

    def sign_out(self, access_token: str) -> None:
        """Revoke the sessions behind an access token (requires a service key)"""
        try:
            self._client().auth.admin.sign_out(access_token)
        except IdentityProviderError:
            raise
        except Exception as e:
            logger.error(f"Sign out failed at identity provider: {_error_message(e)}")
            raise IdentityProviderError(_error_message(e)) from e


def get_identity_provider() -> IdentityProvider:
    return IdentityProvider()
