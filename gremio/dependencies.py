"""
FastAPI dependencies for the Gremio application.

Wires the Supabase client into the backend adapters and initializes every
subsystem's services.
"""

import logging

from supabase import AsyncClient

from common.auth.supabase_auth import SupabaseAuth
from common.database.supabase_store import SupabaseDataStore
from common.storage.supabase_storage import SupabaseStorage
from gremio.account.dependencies import init_account_services
from gremio.applications.dependencies import init_application_services
from gremio.auth.dependencies import init_auth_services
from gremio.config import Settings
from gremio.profile.dependencies import init_profile_services
from gremio.services.dependencies import init_email_service
from gremio.services.email.email_service import EmailService
from gremio.verification.dependencies import init_verification_services

logger = logging.getLogger(__name__)


def build_email_service(settings: Settings) -> EmailService:
    """Create the email service from settings."""
    return EmailService(
        mode=settings.EMAIL_MODE,
        brevo_api_key=settings.BREVO_API_KEY,
        from_email=settings.get_sender_address(),
        from_name=settings.EMAIL_FROM_NAME,
        logo_url=settings.get_logo_url(),
        smtp_host=settings.SMTP_HOST,
        smtp_port=settings.SMTP_PORT,
        smtp_user=settings.SMTP_USER,
        smtp_password=settings.SMTP_PASSWORD,
    )


def init_all_services(client: AsyncClient, settings: Settings) -> None:
    """
    Initialize all services.

    Called once at application startup.

    Args:
        client: Connected Supabase client (service role)
        settings: Application settings
    """
    store = SupabaseDataStore(client)
    storage = SupabaseStorage(client)
    auth = SupabaseAuth(client)
    email_service = build_email_service(settings)

    init_email_service(email_service)

    init_account_services(
        store=store,
        storage=storage,
        auth=auth,
        failure_policy=settings.DELETION_FAILURE_POLICY,
        job_images_bucket=settings.JOB_IMAGES_BUCKET,
        page_size=settings.STORAGE_LIST_PAGE_SIZE,
    )

    init_verification_services(
        email_service=email_service,
        code_ttl_seconds=settings.VERIFICATION_CODE_TTL_SECONDS,
        resend_cooldown_seconds=settings.VERIFICATION_RESEND_COOLDOWN_SECONDS,
    )

    init_auth_services(
        store=store,
        auth=auth,
        email_service=email_service,
        frontend_url=settings.FRONTEND_URL,
        reset_expire_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES,
        min_password_length=settings.PASSWORD_MIN_LENGTH,
    )

    init_application_services(store=store)
    init_profile_services(store=store)

    logger.info("All services initialized")
