"""Transactional email."""

from gremio.services.email.email_service import EmailService, wrap_email_html

__all__ = ["EmailService", "wrap_email_html"]
