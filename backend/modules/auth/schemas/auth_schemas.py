# backend/modules/auth/schemas/auth_schemas.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SignUpRequest(BaseModel):
    email: str
    password: str
    full_name: str
    username: str


class SignInRequest(BaseModel):
    identifier: str = Field(..., description="Email address or username")
    password: str


class ResetPasswordRequest(BaseModel):
    email: str


class AuthSession(BaseModel):
    """Tokens issued by the identity provider for a signed-in user"""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user_id: str
    email: Optional[str] = None


class AuthMessage(BaseModel):
    message: str


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    email: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
