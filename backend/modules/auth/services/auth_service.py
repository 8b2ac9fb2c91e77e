# backend/modules/auth/services/auth_service.py

"""
Account flows on top of the hosted identity provider.

Users sign in with either their email or their username. A username is
resolved to an email through the profiles table; every failure on that path
(unknown username, lookup error, wrong password) returns the same message so
the endpoint cannot be used to discover which usernames exist.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.auth import AuthUser
from core.config import settings
from core.exceptions import AuthenticationError, ConflictError, ValidationError
from ..models.profile_models import Profile
from ..schemas.auth_schemas import AuthSession
from .identity_provider import IdentityProvider, IdentityProviderError

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

INVALID_EMAIL_LOGIN = "Invalid email or password. Please check your credentials and try again."
INVALID_USERNAME_LOGIN = "Invalid username or password. Please check your credentials and try again."
USERNAME_TAKEN = "Username already exists. Please choose a different username."

# Provider error substrings (matched case-insensitively) and what users see instead
PROVIDER_ERROR_MESSAGES = (
    ("user already registered", "An account with this email already exists. Please sign in instead."),
    ("email not confirmed", "Please confirm your email address before signing in."),
    ("invalid login credentials", INVALID_EMAIL_LOGIN),
    ("password should be at least", "Password must be at least 6 characters long"),
    ("unable to validate email address", "Please enter a valid email address"),
    ("rate limit", "Too many attempts. Please wait a moment and try again."),
)


def map_provider_error(message: str) -> str:
    """Translate a provider error to a user-facing message; unknown errors pass through"""
    lowered = (message or "").lower()
    for fragment, friendly in PROVIDER_ERROR_MESSAGES:
        if fragment in lowered:
            return friendly
    return message


def validate_email(email: str) -> str:
    email = (email or "").strip()
    if not email:
        raise ValidationError("Please enter your email address")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Please enter a valid email address")
    return email


def validate_username(username: str) -> str:
    username = (username or "").strip()
    if not username:
        raise ValidationError("Please enter a username")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError("Username must be at least 3 characters long")
    if not USERNAME_PATTERN.match(username):
        raise ValidationError("Username can only contain letters, numbers, and underscores")
    return username


def validate_password(password: str) -> str:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters long")
    return password


class AuthService:
    def __init__(self, db: Session, provider: IdentityProvider, site_url: Optional[str] = None):
        self.db = db
        self.provider = provider
        self.site_url = (site_url or settings.site_url).rstrip("/")

    def sign_up(self, email: str, password: str, full_name: str, username: str) -> None:
        """
        Register a new account.

        The provider sends the verification email; its link lands on
        ``/auth?message=welcome`` of the web app.
        """
        full_name = (full_name or "").strip()
        if not full_name:
            raise ValidationError("Please enter your full name")
        username = validate_username(username)
        email = validate_email(email)
        validate_password(password)

        if self._username_exists(username):
            raise ConflictError(USERNAME_TAKEN)

        redirect_to = f"{self.site_url}/auth?message=welcome&email={quote(email, safe='')}"
        try:
            self.provider.sign_up(
                email,
                password,
                redirect_to=redirect_to,
                metadata={"full_name": full_name, "username": username},
            )
        except IdentityProviderError as e:
            raise ValidationError(map_provider_error(e.message))

        logger.info(f"Sign up requested for username '{username}'")

    def sign_in(self, identifier: str, password: str) -> AuthSession:
        """Sign in with an email (anything containing '@') or a username"""
        identifier = (identifier or "").strip()
        if not identifier or not (password or "").strip():
            raise ValidationError("Please enter your credentials")

        if "@" in identifier:
            return self._sign_in_with_email(identifier, password, INVALID_EMAIL_LOGIN)

        try:
            email = (
                self.db.query(Profile.email)
                .filter(Profile.username == identifier)
                .scalar()
            )
        except SQLAlchemyError as e:
            logger.error(f"Username lookup failed: {str(e)}")
            raise AuthenticationError(INVALID_USERNAME_LOGIN)

        if not email:
            logger.info("Sign in attempted with unknown username")
            raise AuthenticationError(INVALID_USERNAME_LOGIN)
        return self._sign_in_with_email(email, password, INVALID_USERNAME_LOGIN)

    def _sign_in_with_email(self, email: str, password: str, failure_message: str) -> AuthSession:
        try:
            session = self.provider.sign_in_with_password(email, password)
        except IdentityProviderError:
            raise AuthenticationError(failure_message)

        logger.info(f"User {session.user.id} signed in")
        return AuthSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            user_id=session.user.id,
            email=session.user.email,
        )

    def reset_password(self, email: str) -> None:
        email = validate_email(email)
        try:
            self.provider.reset_password_for_email(
                email, redirect_to=f"{self.site_url}/auth?message=reset"
            )
        except IdentityProviderError as e:
            raise ValidationError(map_provider_error(e.message))

    def sign_out(self, access_token: str) -> None:
        try:
            self.provider.sign_out(access_token)
        except IdentityProviderError as e:
            raise ValidationError(map_provider_error(e.message))

    def ensure_profile(self, user: AuthUser) -> Profile:
        """Return the caller's profile, creating it from sign-up metadata on first login"""
        profile = self.db.query(Profile).filter(Profile.user_id == user.id).first()
        if profile:
            return profile

        metadata = user.user_metadata or {}
        username = metadata.get("username")
        if username and self._username_exists(username):
            logger.warning(f"Username '{username}' already taken, creating profile without it")
            username = None

        profile = Profile(
            user_id=user.id,
            email=user.email,
            username=username,
            full_name=metadata.get("full_name") or "",
        )
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        logger.info(f"Created profile {profile.id} for user {user.id}")
        return profile

    def _username_exists(self, username: str) -> bool:
        try:
            return (
                self.db.query(Profile.id).filter(Profile.username == username).first()
                is not None
            )
        except SQLAlchemyError as e:
            # Lookup failures do not block signup
            logger.error(f"Error checking username: {str(e)}")
            return False
