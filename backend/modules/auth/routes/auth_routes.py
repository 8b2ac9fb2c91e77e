"""
Authentication routes.

Accounts live with the hosted identity provider; these endpoints front its
sign-up, sign-in and password reset flows and keep the local profile row in
step with the account.
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from core.auth import AuthUser, get_current_user, security
from core.database import get_db
from ..schemas.auth_schemas import (
    AuthMessage, AuthSession, ProfileResponse, ResetPasswordRequest,
    SignInRequest, SignUpRequest,
)
from ..services.auth_service import AuthService
from ..services.identity_provider import IdentityProvider, get_identity_provider

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(db, provider)


@router.post("/sign-up", response_model=AuthMessage, status_code=status.HTTP_201_CREATED)
async def sign_up(data: SignUpRequest, service: AuthService = Depends(get_auth_service)):
    """
    Create an account and send the verification email.

    ## Request Body
    - **email**, **password** (at least 6 characters)
    - **full_name**
    - **username**: at least 3 letters, numbers or underscores; must be unused

    ## Example
    ```bash
    curl -X POST "http://localhost:8000/api/v1/auth/sign-up" \
         -H "Content-Type: application/json" \
         -d '{"email": "ana@example.com", "password": "secret1", "full_name": "Ana", "username": "ana"}'
    ```
    """
    service.sign_up(data.email, data.password, data.full_name, data.username)
    return AuthMessage(message="Check your email to confirm your account")


@router.post("/sign-in", response_model=AuthSession)
async def sign_in(data: SignInRequest, service: AuthService = Depends(get_auth_service)):
    """
    Sign in with an email address or a username.

    Unknown usernames and wrong passwords get the same 401 response.
    """
    return service.sign_in(data.identifier, data.password)


@router.post("/reset-password", response_model=AuthMessage)
async def reset_password(
    data: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)
):
    service.reset_password(data.email)
    return AuthMessage(message="Password reset email sent")


@router.post("/sign-out", response_model=AuthMessage)
async def sign_out(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    current_user: AuthUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    service.sign_out(credentials.credentials)
    return AuthMessage(message="Signed out")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: AuthUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Current user's profile, created from sign-up details on first call"""
    return service.ensure_profile(current_user)
