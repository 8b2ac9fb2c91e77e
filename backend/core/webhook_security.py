"""
Webhook signature validation.

Implements the Standard Webhooks scheme used by the auth provider's
send-email hook: the signature is an HMAC-SHA256 over
``{webhook-id}.{webhook-timestamp}.{body}`` keyed with the base64-decoded
secret, sent as one or more space-separated ``v1,<base64>`` entries.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

SECRET_PREFIXES = ("v1,whsec_", "whsec_")
ID_HEADER = "webhook-id"
TIMESTAMP_HEADER = "webhook-timestamp"
SIGNATURE_HEADER = "webhook-signature"


class WebhookVerificationError(Exception):
    """Raised when a webhook payload cannot be authenticated"""


class StandardWebhookVerifier:
    """Validates Standard Webhooks signatures."""

    def __init__(self, secret: str, tolerance_seconds: int = 300):
        self._key = self._decode_secret(secret)
        self.tolerance_seconds = tolerance_seconds

    @staticmethod
    def _decode_secret(secret: str) -> bytes:
        if not secret:
            raise WebhookVerificationError("Webhook secret is empty")
        for prefix in SECRET_PREFIXES:
            if secret.startswith(prefix):
                secret = secret[len(prefix):]
                break
        try:
            return base64.b64decode(secret, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise WebhookVerificationError("Webhook secret is not valid base64") from exc

    def sign(self, msg_id: str, timestamp: int, payload: Union[str, bytes]) -> str:
        """Return the ``v1,<base64>`` signature for a message."""
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        to_sign = f"{msg_id}.{timestamp}.{payload}".encode("utf-8")
        digest = hmac.new(self._key, to_sign, hashlib.sha256).digest()
        return f"v1,{base64.b64encode(digest).decode('ascii')}"

    def verify(
        self,
        payload: Union[str, bytes],
        headers: Mapping[str, str],
        now: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Verify a webhook and return its decoded JSON body.

        Raises:
            WebhookVerificationError: missing headers, stale timestamp,
                signature mismatch or a body that is not JSON
        """
        lowered = {k.lower(): v for k, v in headers.items()}
        msg_id = lowered.get(ID_HEADER)
        timestamp_str = lowered.get(TIMESTAMP_HEADER)
        signature_header = lowered.get(SIGNATURE_HEADER)

        if not (msg_id and timestamp_str and signature_header):
            raise WebhookVerificationError("Missing required webhook headers")

        try:
            timestamp = int(timestamp_str)
        except ValueError as exc:
            raise WebhookVerificationError("Invalid webhook timestamp") from exc

        current = int(time.time()) if now is None else now
        if abs(current - timestamp) > self.tolerance_seconds:
            raise WebhookVerificationError("Webhook timestamp outside tolerance window")

        expected = self.sign(msg_id, timestamp, payload).split(",", 1)[1]
        for candidate in signature_header.split(" "):
            version, _, signature = candidate.partition(",")
            if version != "v1":
                continue
            if hmac.compare_digest(signature.encode(), expected.encode()):
                break
        else:
            raise WebhookVerificationError("No matching webhook signature found")

        try:
            return json.loads(payload)
        except (TypeError, ValueError) as exc:
            raise WebhookVerificationError("Webhook body is not valid JSON") from exc
