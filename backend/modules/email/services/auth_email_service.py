# backend/modules/email/services/auth_email_service.py

"""
Handlers for the identity provider's send-email hook.

Both handlers fail open: whatever goes wrong (unreadable body, missing
configuration, bad signature, template or delivery failure) the result is a
``skipped`` EmailDeliveryResult with a reason, never an exception, so signup
and password reset are not blocked by email delivery.
"""

import json
import logging
from typing import Dict, Mapping, Optional, Union
from urllib.parse import urlencode

from pydantic import ValidationError as PayloadValidationError

from core.email_config import EmailSettings, get_email_settings
from core.webhook_security import StandardWebhookVerifier, WebhookVerificationError
from ..schemas.email_schemas import (
    AuthEmailHookPayload, DeliveryStatus, EmailDeliveryResult, SkipReason,
)
from .resend_service import EmailSendError, ResendService
from .template_service import AuthEmailRenderer, EmailRenderError

logger = logging.getLogger(__name__)

VERIFICATION = "verification"
RESET = "reset"

MESSAGES: Dict[str, Dict[Union[SkipReason, DeliveryStatus], str]] = {
    VERIFICATION: {
        DeliveryStatus.DELIVERED: "Verification email sent",
        SkipReason.PAYLOAD_INVALID: "Signup completed - email verification skipped due to payload parsing issue",
        SkipReason.NOT_CONFIGURED: "Email service not configured - signup allowed without email verification",
        SkipReason.SIGNATURE_INVALID: "Signup completed - email verification skipped due to webhook verification issue",
        SkipReason.RENDER_FAILED: "Signup completed - email verification skipped due to dependency issue",
        SkipReason.SEND_FAILED: "Signup completed - email verification skipped due to email sending issue",
        SkipReason.UNEXPECTED_ERROR: "Signup completed - email verification skipped due to configuration issue",
    },
    RESET: {
        DeliveryStatus.DELIVERED: "Password reset email sent",
        SkipReason.PAYLOAD_INVALID: "Password reset completed - email sending skipped due to payload parsing issue",
        SkipReason.NOT_CONFIGURED: "Email service not configured - password reset allowed without email",
        SkipReason.SIGNATURE_INVALID: "Password reset completed - email sending skipped due to webhook verification issue",
        SkipReason.RENDER_FAILED: "Password reset completed - email sending skipped due to dependency issue",
        SkipReason.SEND_FAILED: "Password reset completed - email sending skipped due to email sending issue",
        SkipReason.UNEXPECTED_ERROR: "Password reset completed - email sending skipped due to configuration issue",
    },
}


def build_action_url(base_url: str, token_hash: str, action_type: str, redirect_to: str) -> str:
    """Link to the auth API's verify endpoint for a token"""
    query = urlencode({"token": token_hash, "type": action_type, "redirect_to": redirect_to})
    return f"{base_url.rstrip('/')}/auth/v1/verify?{query}"


class AuthEmailHookService:
    """Verifies send-email hook calls and delivers the matching email"""

    def __init__(
        self,
        settings: Optional[EmailSettings] = None,
        sender: Optional[ResendService] = None,
        renderer: Optional[AuthEmailRenderer] = None,
        now: Optional[int] = None,
    ):
        self._settings = settings
        self._sender = sender
        self._renderer = renderer
        self._now = now

    async def send_verification_email(
        self, body: bytes, headers: Mapping[str, str]
    ) -> EmailDeliveryResult:
        return await self._handle(VERIFICATION, body, headers)

    async def send_reset_email(self, body: bytes, headers: Mapping[str, str]) -> EmailDeliveryResult:
        return await self._handle(RESET, body, headers)

    async def _handle(self, kind: str, body: bytes, headers: Mapping[str, str]) -> EmailDeliveryResult:
        logger.info(f"Received send-email hook for {kind} email")
        try:
            result = await self._deliver(kind, body, headers)
        except Exception:
            logger.exception(f"Unexpected error while handling {kind} email hook")
            result = self._skipped(kind, SkipReason.UNEXPECTED_ERROR)

        if result.delivered:
            logger.info(f"{kind.capitalize()} email delivered to {result.recipient}")
        else:
            logger.warning(f"{kind.capitalize()} email skipped: {result.reason.value}")
        return result

    async def _deliver(self, kind: str, body: bytes, headers: Mapping[str, str]) -> EmailDeliveryResult:
        try:
            json.loads(body)
        except ValueError as e:
            logger.warning(f"Could not parse {kind} hook payload: {str(e)}")
            return self._skipped(kind, SkipReason.PAYLOAD_INVALID)

        settings = self._settings or get_email_settings()
        if not settings.is_configured:
            logger.warning(
                "Email service not configured - RESEND_API_KEY, SEND_EMAIL_HOOK_SECRET "
                "or SUPABASE_URL missing"
            )
            return self._skipped(kind, SkipReason.NOT_CONFIGURED)

        try:
            verifier = StandardWebhookVerifier(
                settings.SEND_EMAIL_HOOK_SECRET,
                tolerance_seconds=settings.WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS,
            )
            data = verifier.verify(body, headers, now=self._now)
        except WebhookVerificationError as e:
            logger.error(f"Webhook verification failed: {str(e)}")
            return self._skipped(kind, SkipReason.SIGNATURE_INVALID)

        try:
            payload = AuthEmailHookPayload.model_validate(data)
        except PayloadValidationError as e:
            logger.warning(f"Hook payload missing required fields: {e.error_count()} errors")
            return self._skipped(kind, SkipReason.PAYLOAD_INVALID)

        recipient = payload.user.email
        action_url = build_action_url(
            settings.AUTH_BASE_URL,
            payload.email_data.token_hash,
            payload.email_data.email_action_type,
            payload.email_data.redirect_to,
        )

        renderer = self._renderer or AuthEmailRenderer(settings.PRODUCT_NAME, settings.TRIAL_DAYS)
        try:
            subject, html = renderer.render(kind, action_url, recipient)
        except EmailRenderError:
            return self._skipped(kind, SkipReason.RENDER_FAILED, recipient)

        sender = self._sender or ResendService(
            settings.RESEND_API_KEY,
            api_url=settings.RESEND_API_URL,
            timeout=settings.RESEND_TIMEOUT_SECONDS,
        )
        try:
            message_id = await sender.send_email(settings.sender, [recipient], subject, html)
        except EmailSendError as e:
            logger.error(f"Error sending {kind} email: {str(e)}")
            return self._skipped(kind, SkipReason.SEND_FAILED, recipient)

        return EmailDeliveryResult(
            status=DeliveryStatus.DELIVERED,
            message=MESSAGES[kind][DeliveryStatus.DELIVERED],
            recipient=recipient,
            provider_message_id=message_id,
        )

    @staticmethod
    def _skipped(kind: str, reason: SkipReason, recipient: Optional[str] = None) -> EmailDeliveryResult:
        return EmailDeliveryResult(
            status=DeliveryStatus.SKIPPED,
            reason=reason,
            message=MESSAGES[kind][reason],
            recipient=recipient,
        )
