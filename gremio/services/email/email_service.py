"""
Email service for sending transactional emails.

Supports Brevo API, SMTP, and console logging modes.
"""

import html as html_lib
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

import httpx
import aiosmtplib

from config.email_config import (
    BREVO_API_URL,
    EMAIL_REQUEST_TIMEOUT,
    EMAIL_DEFAULTS,
)

logger = logging.getLogger(__name__)


def wrap_email_html(title: str, inner_html: str, logo_url: str = "") -> str:
    """
    Wrap email content in the shared card layout.

    Args:
        title: Heading shown above the content
        inner_html: Body markup
        logo_url: Absolute logo URL; the logo block is omitted when empty

    Returns:
        Complete HTML body
    """
    logo_block = ""
    if logo_url:
        logo_block = f"""
                <div style="text-align:center;margin-bottom:14px;">
                    <img src="{html_lib.escape(logo_url, quote=True)}" width="56" height="56" alt="GREMIO" style="display:inline-block;border-radius:12px;" />
                </div>"""

    return f"""
<div style="margin:0;padding:0;background:#f6f7fb;">
    <div style="max-width:520px;margin:0 auto;padding:24px;">
        <div style="background:#ffffff;border:1px solid #e7e9f0;border-radius:14px;padding:22px;font-family:Arial, sans-serif;">{logo_block}
            <h2 style="margin:0 0 10px 0;color:#111827;font-size:20px;">{title}</h2>
            {inner_html}
            <p style="margin:18px 0 0 0;color:#6b7280;font-size:12px;line-height:1.4;">Si no solicitaste este correo, podés ignorarlo.</p>
        </div>
    </div>
</div>
"""


class EmailService:
    """
    Email service with multi-mode support.

    Modes:
        - console: Log emails to console (development)
        - smtp: Send via SMTP
        - brevo: Send via Brevo HTTP API

    Sending never raises; callers get a dict with a ``success`` flag.
    """

    def __init__(
        self,
        mode: str = EMAIL_DEFAULTS["mode"],
        brevo_api_key: Optional[str] = None,
        from_email: str = "noreply@gremio.app",
        from_name: str = EMAIL_DEFAULTS["from_name"],
        logo_url: str = "",
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        timeout: float = EMAIL_REQUEST_TIMEOUT,
    ):
        """
        Initialize email service.

        Args:
            mode: "console", "smtp", or "brevo"
            brevo_api_key: Brevo API key
            from_email: Sender email address
            from_name: Sender display name
            logo_url: Absolute logo URL for the email header
            smtp_host: SMTP server host
            smtp_port: SMTP server port
            smtp_user: SMTP username
            smtp_password: SMTP password
            timeout: Provider request timeout in seconds
        """
        self._mode = (mode or "console").strip().lower()
        self._brevo_api_key = brevo_api_key
        self._from_email = from_email
        self._from_name = from_name
        self._logo_url = logo_url
        self._smtp_host = smtp_host
        self._smtp_port = smtp_port
        self._smtp_user = smtp_user
        self._smtp_password = smtp_password
        self._timeout = timeout

        if self._mode == "brevo" and not self._brevo_api_key:
            logger.warning("Brevo API key not configured, falling back to console mode")
            self._mode = "console"
        elif self._mode == "smtp" and not self._smtp_host:
            logger.warning("SMTP host not configured, falling back to console mode")
            self._mode = "console"

        logger.info(f"Email service initialized in {self._mode} mode")

    @property
    def mode(self) -> str:
        return self._mode

    async def send_verification_code(self, to_email: str, code: str, expires_in_minutes: int = 5) -> dict:
        """
        Send an account verification code.

        Args:
            to_email: Recipient email address
            code: Six digit code
            expires_in_minutes: Shown in the email body

        Returns:
            dict with success status and message
        """
        inner_html = f"""
            <p style="margin:0 0 14px 0;color:#374151;font-size:14px;line-height:1.4;">Usá este código para verificar tu cuenta:</p>

            <div style="text-align:center;margin:18px 0 18px 0;">
                <div style="display:inline-block;padding:14px 18px;border-radius:12px;border:1px dashed #c7cbe0;background:#f8fafc;">
                    <div style="letter-spacing:6px;font-weight:700;font-size:28px;color:#111827;">{code}</div>
                </div>
            </div>

            <p style="margin:0;color:#6b7280;font-size:13px;">Este código vence en {expires_in_minutes} minutos.</p>
"""

        text_content = f"""
Código de verificación

Usá este código para verificar tu cuenta: {code}

Este código vence en {expires_in_minutes} minutos.
"""

        return await self._send(
            to=to_email,
            subject="✨ Verifica tu cuenta · Gremio",
            html=wrap_email_html("Código de verificación", inner_html, self._logo_url),
            text=text_content,
        )

    async def send_password_reset(self, to_email: str, reset_link: str, expires_in_minutes: int = 15) -> dict:
        """
        Send a password reset link.

        Args:
            to_email: Recipient email address
            reset_link: Link to the reset page, token included
            expires_in_minutes: Shown in the email body

        Returns:
            dict with success status and message
        """
        link = html_lib.escape(reset_link, quote=True)
        inner_html = f"""
            <p style="margin:0 0 14px 0;color:#374151;font-size:14px;line-height:1.4;">Recibimos un pedido para restablecer tu contraseña.</p>
            <p style="margin:0 0 18px 0;color:#374151;font-size:14px;line-height:1.4;">Hacé clic en el botón para continuar (el enlace vence en {expires_in_minutes} minutos):</p>

            <div style="text-align:center;margin:18px 0 18px 0;">
                <a href="{link}" style="display:inline-block;background:#2563eb;color:#ffffff;text-decoration:none;padding:12px 18px;border-radius:10px;font-weight:700;">Restablecer contraseña</a>
            </div>

            <p style="margin:0;color:#6b7280;font-size:12px;line-height:1.4;">Si el botón no funciona, copiá y pegá este enlace en tu navegador:</p>
            <p style="margin:8px 0 0 0;color:#111827;font-size:12px;word-break:break-all;">{link}</p>
"""

        text_content = f"""
Recuperar contraseña

Recibimos un pedido para restablecer tu contraseña.
Abrí este enlace para continuar (vence en {expires_in_minutes} minutos):

{reset_link}
"""

        return await self._send(
            to=to_email,
            subject="Recuperar contraseña",
            html=wrap_email_html("Recuperar contraseña", inner_html, self._logo_url),
            text=text_content,
        )

    async def _send(
        self,
        to: str,
        subject: str,
        html: str,
        text: str,
    ) -> dict:
        """
        Send email via configured provider.

        Args:
            to: Recipient email
            subject: Email subject
            html: HTML content
            text: Plain text content

        Returns:
            dict with success status and details
        """
        if self._mode == "console":
            return self._send_console(to, subject, html, text)
        elif self._mode == "smtp":
            return await self._send_smtp(to, subject, html, text)
        elif self._mode == "brevo":
            return await self._send_brevo(to, subject, html, text)
        else:
            logger.error(f"Unknown email mode: {self._mode}")
            return {"success": False, "error": f"Unknown email mode: {self._mode}"}

    def _send_console(
        self,
        to: str,
        subject: str,
        html: str,
        text: str,
    ) -> dict:
        """Log email to console (development mode)."""
        logger.info("=" * 60)
        logger.info("EMAIL (console mode)")
        logger.info(f"To: {to}")
        logger.info(f"Subject: {subject}")
        logger.info("-" * 60)
        logger.info(text)
        logger.info("=" * 60)

        return {
            "success": True,
            "mode": "console",
            "message": "Email logged to console",
        }

    async def _send_smtp(
        self,
        to: str,
        subject: str,
        html: str,
        text: str,
    ) -> dict:
        """Send email via SMTP."""
        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self._from_name} <{self._from_email}>"
            message["To"] = to

            message.attach(MIMEText(text, "plain"))
            message.attach(MIMEText(html, "html"))

            # SSL on 465, STARTTLS otherwise
            use_tls = self._smtp_port == 465

            await aiosmtplib.send(
                message,
                hostname=self._smtp_host,
                port=self._smtp_port,
                username=self._smtp_user,
                password=self._smtp_password,
                use_tls=use_tls,
                start_tls=not use_tls,
                timeout=self._timeout,
            )

            logger.info(f"Email sent via SMTP to {to}")
            return {
                "success": True,
                "mode": "smtp",
                "message": "Email sent via SMTP",
            }

        except Exception as e:
            logger.error(f"Failed to send email via SMTP: {e}")
            return {
                "success": False,
                "error": str(e),
            }

    async def _send_brevo(
        self,
        to: str,
        subject: str,
        html: str,
        text: str,
    ) -> dict:
        """Send email via Brevo transactional API."""
        if not self._brevo_api_key:
            return {"success": False, "error": "Brevo API key not configured"}

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await client.post(
                    BREVO_API_URL,
                    headers={
                        "accept": "application/json",
                        "api-key": self._brevo_api_key,
                        "content-type": "application/json",
                    },
                    json={
                        "sender": {"email": self._from_email, "name": self._from_name},
                        "to": [{"email": to}],
                        "subject": subject,
                        "htmlContent": html,
                        "textContent": text,
                    },
                )

                if response.is_success:
                    data = response.json() if response.content else {}
                    logger.info(f"Email sent via Brevo to {to}")
                    return {
                        "success": True,
                        "mode": "brevo",
                        "messageId": data.get("messageId"),
                    }
                else:
                    error_msg = response.text or f"HTTP {response.status_code}"
                    logger.error(f"Brevo API error ({response.status_code}): {error_msg}")
                    return {
                        "success": False,
                        "error": error_msg,
                    }

            except Exception as e:
                logger.error(f"Failed to send email via Brevo: {e}")
                return {
                    "success": False,
                    "error": str(e),
                }
