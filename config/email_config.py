"""
Email service configuration constants.

These are fixed values that don't change per environment.
Environment-specific values (API keys, sender, URLs) are loaded from settings.
"""

# Brevo transactional email endpoint
BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"

# Outbound request timeout (seconds)
EMAIL_REQUEST_TIMEOUT = 10.0

# Default values (can be overridden by env vars)
EMAIL_DEFAULTS = {
    "mode": "console",
    "from_name": "Gremio",
    "logo_path": "/assets/img/favicon3.png",
}
