# backend/modules/email/routers/email_router.py

"""
Send-email hook endpoints called by the identity provider.

Both always answer 200 with ``{"success": true, "message": ...}``; the
outcome of the delivery is only reflected in the message and the logs.
"""

from fastapi import APIRouter, Depends, Request

from ..schemas.email_schemas import HookResponse
from ..services.auth_email_service import AuthEmailHookService

router = APIRouter(prefix="/functions/v1", tags=["Auth Emails"])


def get_auth_email_service() -> AuthEmailHookService:
    return AuthEmailHookService()


@router.post("/send-verification-email", response_model=HookResponse)
async def send_verification_email(
    request: Request,
    service: AuthEmailHookService = Depends(get_auth_email_service),
):
    body = await request.body()
    result = await service.send_verification_email(body, request.headers)
    return HookResponse(success=True, message=result.message)


@router.post("/send-reset-email", response_model=HookResponse)
async def send_reset_email(
    request: Request,
    service: AuthEmailHookService = Depends(get_auth_email_service),
):
    body = await request.body()
    result = await service.send_reset_email(body, request.headers)
    return HookResponse(success=True, message=result.message)
