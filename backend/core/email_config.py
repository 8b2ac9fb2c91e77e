# backend/core/email_config.py

"""
Email configuration settings
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailSettings(BaseSettings):
    """Email webhook and delivery configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore",
        populate_by_name=True,
    )

    # Resend delivery
    RESEND_API_KEY: Optional[str] = Field(default=None)
    RESEND_API_URL: str = Field(default="https://api.resend.com/emails")
    RESEND_TIMEOUT_SECONDS: float = Field(default=10.0)

    # Standard Webhooks secret shared with the auth provider's send-email hook
    SEND_EMAIL_HOOK_SECRET: Optional[str] = Field(default=None)
    WEBHOOK_TIMESTAMP_TOLERANCE_SECONDS: int = Field(default=300)

    # Base URL of the hosted auth API, used to build verification links
    AUTH_BASE_URL: Optional[str] = Field(default=None, alias="SUPABASE_URL")

    # Sender and branding
    EMAIL_FROM_ADDRESS: str = Field(default="noreply@resend.dev")
    EMAIL_FROM_NAME: str = Field(default="ZapDine")
    PRODUCT_NAME: str = Field(default="ZapDine")
    TRIAL_DAYS: int = Field(default=14)

    @property
    def sender(self) -> str:
        return f"{self.EMAIL_FROM_NAME} <{self.EMAIL_FROM_ADDRESS}>"

    @property
    def is_configured(self) -> bool:
        return bool(self.RESEND_API_KEY and self.SEND_EMAIL_HOOK_SECRET and self.AUTH_BASE_URL)


@lru_cache()
def get_email_settings() -> EmailSettings:
    return EmailSettings()
