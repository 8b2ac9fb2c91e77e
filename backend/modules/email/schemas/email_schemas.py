# backend/modules/email/schemas/email_schemas.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class DeliveryStatus(str, Enum):
    DELIVERED = "delivered"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    PAYLOAD_INVALID = "payload_invalid"
    NOT_CONFIGURED = "not_configured"
    SIGNATURE_INVALID = "signature_invalid"
    RENDER_FAILED = "render_failed"
    SEND_FAILED = "send_failed"
    UNEXPECTED_ERROR = "unexpected_error"


class EmailDeliveryResult(BaseModel):
    """
    Outcome of an auth email hook.

    A skipped delivery is not an error for the caller: the signup or reset
    flow continues either way. The reason is kept for logging.
    """
    status: DeliveryStatus
    message: str
    reason: Optional[SkipReason] = None
    recipient: Optional[str] = None
    provider_message_id: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED


class HookResponse(BaseModel):
    success: bool = True
    message: str


# Send-email hook payload
class HookUser(BaseModel):
    email: EmailStr
    id: Optional[str] = None


class HookEmailData(BaseModel):
    token_hash: str = Field(..., min_length=1)
    redirect_to: str = ""
    email_action_type: str = Field(..., min_length=1)
    token: Optional[str] = None
    site_url: Optional[str] = None


class AuthEmailHookPayload(BaseModel):
    user: HookUser
    email_data: HookEmailData
