"""
Configuration module - Fixed, environment-independent constants.
"""

from config.email_config import BREVO_API_URL, EMAIL_REQUEST_TIMEOUT, EMAIL_DEFAULTS
from config.account_config import JOB_IMAGES_BUCKET, STORAGE_LIST_PAGE_SIZE

__all__ = [
    "BREVO_API_URL",
    "EMAIL_REQUEST_TIMEOUT",
    "EMAIL_DEFAULTS",
    "JOB_IMAGES_BUCKET",
    "STORAGE_LIST_PAGE_SIZE",
]
