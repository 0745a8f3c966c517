"""
FastAPI dependencies for shared services.
"""

from gremio.services.email.email_service import EmailService


_email_service: EmailService | None = None


def init_email_service(email_service: EmailService) -> None:
    """
    Register the email service.

    Called once at application startup.
    """
    global _email_service
    _email_service = email_service


def get_email_service() -> EmailService:
    """Get email service instance."""
    if _email_service is None:
        raise RuntimeError("Email service not initialized. Call init_email_service first.")
    return _email_service
