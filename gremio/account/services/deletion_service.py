"""
Account deletion service.

Removes a user and everything that references them: stored files, dependent
rows across the marketplace tables, the profile row and finally the
identity. Runs with the service role, so the caller's identity is checked
here before anything is touched.

Cleanup order:
    1. Snapshot: profile row (avatar) and owned job ids
    2. Storage: avatar object, then every owned job's image folder
    3. Dependent rows, children before parents
    4. Profile row
    5. Identity (the only step whose failure fails the request)

Every step before the identity is best-effort. A failure classified as
"not found" (missing table or row) is a silent no-op; anything else is
recorded as a warning and the plan continues, unless the service runs with
the strict failure policy.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from common.auth.base import AuthProvider
from common.database.base import AnyOf, DataStore, Eq, Filter, In
from common.storage.base import ObjectStorage
from common.utils.exceptions import (
    BadRequestException,
    ForbiddenException,
    InternalServerException,
    UnauthorizedException,
)
from config.account_config import (
    APPLICATIONS_TABLE,
    CANCELLATION_REQUESTS_TABLE,
    COMMENTS_TABLE,
    CONTACT_REQUESTS_TABLE,
    CURRICULUMS_TABLE,
    EDUCATION_TABLE,
    JOB_IMAGES_BUCKET,
    JOB_STATUS_CANCELLED,
    JOB_STATUS_IN_PROGRESS,
    JOBS_TABLE,
    PASSWORD_RESETS_TABLE,
    PORTFOLIO_LINKS_TABLE,
    PRESENCE_TABLE,
    STORAGE_LIST_PAGE_SIZE,
    SUGGESTIONS_TABLE,
    TESTIMONIALS_TABLE,
    USERS_TABLE,
    WORK_EXPERIENCE_TABLE,
)
from gremio.account.services.storage_paths import parse_public_object_url

logger = logging.getLogger(__name__)


class DeletionFailurePolicy(str, Enum):
    """What a recorded cleanup failure does to the rest of the plan."""
    BEST_EFFORT = "best_effort"
    STRICT = "strict"


class FailureClass(str, Enum):
    NOT_FOUND = "not_found"
    WARNING = "warning"


# PostgREST: no rows for a single-row read, unknown table (schema cache),
# undefined table. Auth / storage: missing user or object.
NOT_FOUND_CODES = frozenset({
    "PGRST116",
    "PGRST205",
    "42P01",
    "user_not_found",
    "not_found",
    "NoSuchKey",
})

_NOT_FOUND_PHRASES = ("could not find", "not found")


def classify_failure(error: BaseException) -> FailureClass:
    """
    Decide whether a backend failure means "there was nothing there".

    Args:
        error: Exception raised by a data store, storage or identity call

    Returns:
        FailureClass.NOT_FOUND for missing tables/rows/objects/identities,
        FailureClass.WARNING for everything else
    """
    if getattr(error, "status", None) == 404:
        return FailureClass.NOT_FOUND

    code = getattr(error, "code", None)
    if code is not None and str(code) in NOT_FOUND_CODES:
        return FailureClass.NOT_FOUND

    message = str(getattr(error, "message", None) or error).lower()
    if any(phrase in message for phrase in _NOT_FOUND_PHRASES):
        return FailureClass.NOT_FOUND

    return FailureClass.WARNING


@dataclass
class CleanupWarning:
    step: str
    message: str


@dataclass
class DeletionReport:
    """What a deletion run did. Returned to the caller on success."""
    user_id: str
    owned_job_ids: List[Any] = field(default_factory=list)
    completed_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    warnings: List[CleanupWarning] = field(default_factory=list)
    # Objects that existed and were removed
    files_removed: int = 0
    identity_already_absent: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "ownedJobIds": list(self.owned_job_ids),
            "completedSteps": list(self.completed_steps),
            "skippedSteps": list(self.skipped_steps),
            "warnings": [{"step": w.step, "message": w.message} for w in self.warnings],
            "filesRemoved": self.files_removed,
            "identityAlreadyAbsent": self.identity_already_absent,
        }


@dataclass
class DeletionContext:
    """State shared by the steps of one run. Later steps read what earlier ones found."""
    user_id: str
    report: DeletionReport
    user_row: Optional[Dict[str, Any]] = None
    owned_job_ids: List[Any] = field(default_factory=list)
    assigned_jobs: List[Dict[str, Any]] = field(default_factory=list)
    curriculum_ids: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class CleanupStep:
    name: str
    run: Callable[[DeletionContext], Awaitable[None]]


def _by_user(column: str) -> Callable[[DeletionContext], List[Filter]]:
    return lambda ctx: [Eq(column, ctx.user_id)]


def _ids(rows: Sequence[Dict[str, Any]]) -> List[Any]:
    return [row["id"] for row in rows if row and row.get("id") is not None]


class AccountDeletionService:
    """
    Deletes a user account and its dependent data.

    The identity is removed last and is the authoritative point of no
    return: if it fails the request fails, even though the cleanup before it
    has already been committed. Re-running the deletion for the same user
    converges, since every earlier step no-ops on missing data.
    """

    def __init__(
        self,
        store: DataStore,
        storage: ObjectStorage,
        auth: AuthProvider,
        failure_policy: DeletionFailurePolicy = DeletionFailurePolicy.BEST_EFFORT,
        job_images_bucket: str = JOB_IMAGES_BUCKET,
        page_size: int = STORAGE_LIST_PAGE_SIZE,
    ):
        """
        Initialize AccountDeletionService.

        Args:
            store: Relational data store (service role)
            storage: Object storage client
            auth: Identity provider with admin access
            failure_policy: BEST_EFFORT keeps going after a failed step,
                STRICT stops before the profile row and identity are touched
            job_images_bucket: Bucket holding job images under <user>/<job>/
            page_size: Storage listing page size
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")

        self._store = store
        self._storage = storage
        self._auth = auth
        self._policy = DeletionFailurePolicy(failure_policy)
        self._job_images_bucket = job_images_bucket
        self._page_size = page_size

    async def delete_account(
        self,
        credential: Optional[str],
        user_id: Optional[str],
    ) -> DeletionReport:
        """
        Delete the caller's own account.

        Args:
            credential: Bearer token presented with the request
            user_id: Account to delete; must be the caller's

        Returns:
            DeletionReport describing the run

        Raises:
            BadRequestException: user_id missing (nothing is touched)
            UnauthorizedException: token missing or invalid (nothing is touched)
            ForbiddenException: token belongs to another user (nothing is touched)
            InternalServerException: identity deletion failed, or a cleanup
                step failed under the strict policy
        """
        user_id = str(user_id or "").strip()
        if not user_id:
            raise BadRequestException(message="userId es requerido", code="USER_ID_REQUIRED")

        await self._authorize(credential, user_id)

        logger.info(f"Account deletion started for user {user_id}")
        ctx = DeletionContext(user_id=user_id, report=DeletionReport(user_id=user_id))

        logger.info("Step 1: reading profile and owned jobs")
        await self._run_step(CleanupStep("snapshot:user", self._read_user_row), ctx)
        await self._run_step(CleanupStep("snapshot:owned_jobs", self._read_owned_jobs), ctx)
        ctx.report.owned_job_ids = list(ctx.owned_job_ids)

        logger.info("Step 2: removing stored files")
        for step in self._storage_steps(ctx):
            await self._run_step(step, ctx)

        logger.info("Step 3: removing related rows")
        for step in self._row_steps():
            await self._run_step(step, ctx)

        logger.info("Step 4: removing profile row")
        await self._run_step(
            self._delete_rows(USERS_TABLE, lambda c: [Eq("id", c.user_id)]),
            ctx,
        )

        logger.info("Step 5: removing identity")
        await self._delete_identity(ctx)

        logger.info(
            f"Account deletion completed for user {user_id}: "
            f"{len(ctx.report.completed_steps)} steps, "
            f"{ctx.report.files_removed} files, "
            f"{len(ctx.report.warnings)} warnings"
        )
        return ctx.report

    # ─────────────────────────────────────────────────────────────
    # Authorization
    # ─────────────────────────────────────────────────────────────

    async def _authorize(self, credential: Optional[str], user_id: str) -> None:
        token = (credential or "").strip()
        if not token:
            raise UnauthorizedException(
                message="Falta Authorization Bearer token",
                code="MISSING_TOKEN",
            )

        try:
            claims = await self._auth.verify_token(token)
        except ValueError as e:
            logger.warning(f"Deletion token rejected: {e}")
            raise UnauthorizedException(
                message="Token inválido o expirado",
                code="INVALID_TOKEN",
            )

        caller_id = claims.get("sub") or claims.get("uid")
        if not caller_id:
            raise UnauthorizedException(
                message="Token inválido o expirado",
                code="INVALID_TOKEN",
            )

        if str(caller_id) != user_id:
            logger.warning(f"User {caller_id} tried to delete account {user_id}")
            raise ForbiddenException(
                message="No autorizado para eliminar esta cuenta",
                code="ACCOUNT_MISMATCH",
            )

    # ─────────────────────────────────────────────────────────────
    # Plan
    # ─────────────────────────────────────────────────────────────

    def _storage_steps(self, ctx: DeletionContext) -> List[CleanupStep]:
        steps = [CleanupStep("storage:avatar", self._remove_avatar)]
        for job_id in ctx.owned_job_ids:
            steps.append(CleanupStep(
                f"storage:job_images:{job_id}",
                partial(self._remove_job_images, job_id=job_id),
            ))
        return steps

    def _row_steps(self) -> List[CleanupStep]:
        return [
            self._delete_rows(PRESENCE_TABLE, _by_user("user_id")),
            self._delete_rows(SUGGESTIONS_TABLE, _by_user("user_id")),
            self._delete_rows(PASSWORD_RESETS_TABLE, _by_user("user_id")),
            self._delete_rows(COMMENTS_TABLE, _by_user("user_id")),
            self._delete_rows(
                CANCELLATION_REQUESTS_TABLE,
                lambda c: [AnyOf((Eq("requested_by", c.user_id), Eq("requested_to", c.user_id)))],
                label="participants",
            ),
            # job_id is a text column there, not a foreign key
            self._delete_rows(
                CANCELLATION_REQUESTS_TABLE,
                lambda c: [In("job_id", [str(j) for j in c.owned_job_ids])] if c.owned_job_ids else None,
                label="owned_jobs",
            ),
            self._delete_rows(APPLICATIONS_TABLE, _by_user("trabajador_id"), label="as_worker"),
            self._delete_rows(
                APPLICATIONS_TABLE,
                lambda c: [In("trabajo_id", c.owned_job_ids)] if c.owned_job_ids else None,
                label="owned_jobs",
            ),
            CleanupStep("read:assigned_jobs", self._read_assigned_jobs),
            CleanupStep("update:jobs:unassign_worker", self._unassign_worker),
            CleanupStep("update:jobs:cancel_in_progress", self._cancel_in_progress_jobs),
            self._delete_rows(
                CONTACT_REQUESTS_TABLE,
                lambda c: [AnyOf((Eq("employer_id", c.user_id), Eq("worker_id", c.user_id)))],
            ),
            CleanupStep("read:curriculums", self._read_curriculum_ids),
            self._delete_rows(
                WORK_EXPERIENCE_TABLE,
                lambda c: [In("curriculum_id", c.curriculum_ids)] if c.curriculum_ids else None,
            ),
            self._delete_rows(
                EDUCATION_TABLE,
                lambda c: [In("curriculum_id", c.curriculum_ids)] if c.curriculum_ids else None,
            ),
            # Links and testimonials are keyed by the user id in curriculum_id
            self._delete_rows(PORTFOLIO_LINKS_TABLE, _by_user("curriculum_id")),
            self._delete_rows(TESTIMONIALS_TABLE, _by_user("curriculum_id")),
            self._delete_rows(CURRICULUMS_TABLE, _by_user("user_id")),
            # Fall back to the owner column when the snapshot came back empty
            self._delete_rows(
                JOBS_TABLE,
                lambda c: [In("id", c.owned_job_ids)] if c.owned_job_ids else [Eq("user_id", c.user_id)],
                label="owned",
            ),
        ]

    def _delete_rows(
        self,
        table: str,
        where: Callable[[DeletionContext], Optional[List[Filter]]],
        label: Optional[str] = None,
    ) -> CleanupStep:
        """Build a delete step. ``where`` returning None means there is nothing to delete."""

        async def run(ctx: DeletionContext) -> None:
            filters = where(ctx)
            if not filters:
                return
            await self._store.delete(table, filters)

        name = f"delete:{table}" + (f":{label}" if label else "")
        return CleanupStep(name, run)

    async def _run_step(self, step: CleanupStep, ctx: DeletionContext) -> None:
        try:
            await step.run(ctx)
        except Exception as e:
            if classify_failure(e) is FailureClass.NOT_FOUND:
                logger.debug(f"{step.name}: nothing to clean ({e})")
                ctx.report.skipped_steps.append(step.name)
                return

            logger.warning(f"Cleanup step {step.name} failed for user {ctx.user_id}: {e}")
            ctx.report.warnings.append(CleanupWarning(step=step.name, message=str(e)))

            if self._policy is DeletionFailurePolicy.STRICT:
                raise InternalServerException(
                    message=f"Error al eliminar datos de la cuenta ({step.name})",
                    code="CLEANUP_FAILED",
                    details={"step": step.name, "error": str(e)},
                )
            return

        ctx.report.completed_steps.append(step.name)
        logger.debug(f"✓ {step.name}")

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    async def _read_user_row(self, ctx: DeletionContext) -> None:
        ctx.user_row = await self._store.select_one(
            USERS_TABLE,
            "id, avatar_url, role",
            filters=[Eq("id", ctx.user_id)],
        )

    async def _read_owned_jobs(self, ctx: DeletionContext) -> None:
        rows = await self._store.select(JOBS_TABLE, "id", filters=[Eq("user_id", ctx.user_id)])
        ctx.owned_job_ids = _ids(rows)

    async def _read_assigned_jobs(self, ctx: DeletionContext) -> None:
        ctx.assigned_jobs = await self._store.select(
            JOBS_TABLE,
            "id, estado",
            filters=[Eq("trabajador_id", ctx.user_id)],
        )

    async def _read_curriculum_ids(self, ctx: DeletionContext) -> None:
        rows = await self._store.select(CURRICULUMS_TABLE, "id", filters=[Eq("user_id", ctx.user_id)])
        ctx.curriculum_ids = _ids(rows)

    # ─────────────────────────────────────────────────────────────
    # Storage
    # ─────────────────────────────────────────────────────────────

    async def _remove_avatar(self, ctx: DeletionContext) -> None:
        ref = parse_public_object_url((ctx.user_row or {}).get("avatar_url"))
        if ref is None:
            return
        removed = await self._storage.remove(ref.bucket, [ref.path])
        ctx.report.files_removed += len(removed)

    async def _remove_job_images(self, ctx: DeletionContext, job_id: Any) -> None:
        """
        Remove every object under ``<user>/<job>``.

        The whole folder is listed before anything is removed: removing
        while paging by offset would shift later entries out of reach.
        """
        prefix = f"{ctx.user_id}/{job_id}"
        paths: List[str] = []
        offset = 0

        while True:
            files = await self._storage.list(
                self._job_images_bucket,
                prefix,
                limit=self._page_size,
                offset=offset,
            )
            names = [f.get("name") for f in files if f and f.get("name")]
            paths.extend(f"{prefix}/{name}" for name in names)
            if len(files) < self._page_size:
                break
            offset += self._page_size

        for start in range(0, len(paths), self._page_size):
            batch = paths[start:start + self._page_size]
            removed = await self._storage.remove(self._job_images_bucket, batch)
            ctx.report.files_removed += len(removed)

    # ─────────────────────────────────────────────────────────────
    # Jobs the user was working on
    # ─────────────────────────────────────────────────────────────

    async def _unassign_worker(self, ctx: DeletionContext) -> None:
        job_ids = _ids(ctx.assigned_jobs)
        if not job_ids:
            return
        await self._store.update(JOBS_TABLE, {"trabajador_id": None}, [In("id", job_ids)])

    async def _cancel_in_progress_jobs(self, ctx: DeletionContext) -> None:
        """Only in-progress jobs are cancelled; finished or other states are left alone."""
        job_ids = _ids([
            job for job in ctx.assigned_jobs
            if str(job.get("estado") or "").strip().lower() == JOB_STATUS_IN_PROGRESS
        ])
        if not job_ids:
            return
        await self._store.update(JOBS_TABLE, {"estado": JOB_STATUS_CANCELLED}, [In("id", job_ids)])

    # ─────────────────────────────────────────────────────────────
    # Identity
    # ─────────────────────────────────────────────────────────────

    async def _delete_identity(self, ctx: DeletionContext) -> None:
        try:
            await self._auth.delete_user(ctx.user_id)
        except Exception as e:
            if classify_failure(e) is FailureClass.NOT_FOUND:
                logger.info(f"Identity for user {ctx.user_id} was already gone")
                ctx.report.identity_already_absent = True
                return

            message = getattr(e, "message", None) or str(e)
            logger.error(f"Identity deletion failed for user {ctx.user_id}: {message}")
            raise InternalServerException(
                message=f"Error al eliminar usuario de Auth: {message}",
                code="IDENTITY_DELETION_FAILED",
            )

        logger.info(f"✓ Identity removed for user {ctx.user_id}")
