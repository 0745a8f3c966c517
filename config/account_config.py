"""
Account data layout constants.

Table, column and bucket names the account services read and clean up.
They mirror the deployed database schema, so they are code, not settings.
"""

# ─────────────────────────────────────────────────────────────────
# Tables
# ─────────────────────────────────────────────────────────────────
USERS_TABLE = "users"
JOBS_TABLE = "jobs"
APPLICATIONS_TABLE = "postulaciones"
CURRICULUMS_TABLE = "curriculums"
WORK_EXPERIENCE_TABLE = "experiencia_laboral"
EDUCATION_TABLE = "educacion"
PORTFOLIO_LINKS_TABLE = "enlaces_portfolio"
TESTIMONIALS_TABLE = "testimonios"
PRESENCE_TABLE = "user_presence"
SUGGESTIONS_TABLE = "user_suggestions"
PASSWORD_RESETS_TABLE = "password_resets"
COMMENTS_TABLE = "comments"
CANCELLATION_REQUESTS_TABLE = "job_cancellation_requests"
CONTACT_REQUESTS_TABLE = "cv_contact_requests"

# ─────────────────────────────────────────────────────────────────
# Job and application states
# ─────────────────────────────────────────────────────────────────
JOB_STATUS_OPEN = "abierto"
JOB_STATUS_IN_PROGRESS = "en_curso"
JOB_STATUS_CANCELLED = "cancelado"

APPLICATION_STATUS_APPLIED = "postulado"

ROLE_EMPLOYER = "empleador"

# ─────────────────────────────────────────────────────────────────
# Storage
# ─────────────────────────────────────────────────────────────────
JOB_IMAGES_BUCKET = "job-images"
STORAGE_LIST_PAGE_SIZE = 100

# Public object URLs look like
# https://<project>.supabase.co/storage/v1/object/public/<bucket>/<path>
PUBLIC_OBJECT_URL_MARKER = "/storage/v1/object/public/"

# ─────────────────────────────────────────────────────────────────
# Public user columns
# ─────────────────────────────────────────────────────────────────
PUBLIC_USER_COLUMNS = (
    "id, email, role, perfil_completo, avatar_url, name, phone, provincia, localidad"
)
