# backend/modules/email/services/resend_service.py

import logging
from typing import List, Optional

import httpx

logger = logging.getLogger(__name__)


class EmailSendError(Exception):
    """Raised when the email API rejects or fails a send"""


class ResendService:
    """Service for sending emails via the Resend HTTP API"""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def send_email(
        self, from_address: str, to: List[str], subject: str, html: str
    ) -> Optional[str]:
        """
        Send an HTML email.

        Returns:
            The provider's message id

        Raises:
            EmailSendError: transport failure or a non-2xx response
        """
        payload = {"from": from_address, "to": to, "subject": subject, "html": html}
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise EmailSendError(f"Email API request failed: {str(e)}") from e

        if response.status_code >= 400:
            raise EmailSendError(
                f"Email API returned {response.status_code}: {response.text[:200]}"
            )

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        logger.info(f"Email sent via Resend to {', '.join(to)} (id={message_id})")
        return message_id
