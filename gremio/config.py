"""
Gremio application settings.

Extends the base settings with Gremio-specific configuration.
"""

from typing import Optional

from pydantic import Field

from common.config import BaseAppSettings
from config.account_config import JOB_IMAGES_BUCKET, STORAGE_LIST_PAGE_SIZE
from config.email_config import EMAIL_DEFAULTS


class Settings(BaseAppSettings):
    """Gremio-specific settings."""

    # ==========================================================================
    # Email Settings
    # ==========================================================================
    EMAIL_MODE: str = "console"  # console, smtp, brevo
    BREVO_API_KEY: Optional[str] = None
    BREVO_SENDER: Optional[str] = None
    EMAIL_FROM_NAME: str = "Gremio"
    EMAIL_FROM_ADDRESS: Optional[str] = None  # defaults to BREVO_SENDER, then SMTP_USER

    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None

    # ==========================================================================
    # Public URLs (email links and logo)
    # ==========================================================================
    FRONTEND_URL: Optional[str] = None
    PUBLIC_BASE_URL: Optional[str] = None
    # Absolute logo URL (CDN or public storage object); wins over PUBLIC_BASE_URL
    PUBLIC_LOGO_URL: Optional[str] = None

    # ==========================================================================
    # Account deletion
    # ==========================================================================
    DELETION_FAILURE_POLICY: str = "best_effort"  # best_effort, strict
    JOB_IMAGES_BUCKET: str = JOB_IMAGES_BUCKET
    STORAGE_LIST_PAGE_SIZE: int = Field(default=STORAGE_LIST_PAGE_SIZE, gt=0)

    # ==========================================================================
    # Verification codes and password reset
    # ==========================================================================
    VERIFICATION_CODE_TTL_SECONDS: int = 300
    VERIFICATION_RESEND_COOLDOWN_SECONDS: int = 60
    PASSWORD_RESET_EXPIRE_MINUTES: int = 15
    PASSWORD_MIN_LENGTH: int = 8

    def get_logo_url(self) -> str:
        """Absolute logo URL for emails, or an empty string when none is configured."""
        if self.PUBLIC_LOGO_URL and self.PUBLIC_LOGO_URL.strip():
            return self.PUBLIC_LOGO_URL.strip()
        base = (self.PUBLIC_BASE_URL or self.FRONTEND_URL or "").rstrip("/")
        if not base:
            return ""
        return f"{base}{EMAIL_DEFAULTS['logo_path']}"

    def get_sender_address(self) -> str:
        """Sender address for outgoing email."""
        return self.EMAIL_FROM_ADDRESS or self.BREVO_SENDER or self.SMTP_USER or "noreply@gremio.app"

    def validate_required(self) -> None:
        """Validate base settings plus the email provider credentials."""
        super().validate_required()

        if self.EMAIL_MODE == "brevo" and not (self.BREVO_API_KEY and self.BREVO_SENDER):
            raise ValueError("BREVO_API_KEY and BREVO_SENDER are required when EMAIL_MODE=brevo")


# Global settings instance
settings = Settings()
