"""
Supabase Storage implementation of ObjectStorage.

Example:
    storage = SupabaseStorage(backend.client)
    page = await storage.list("job-images", f"{user_id}/{job_id}", limit=100)
    removed = await storage.remove("job-images", [f"{user_id}/{job_id}/{page[0]['name']}"])
"""

import logging
from typing import Any, Dict, List, Optional

from supabase import AsyncClient

from common.storage.base import ObjectStorage
from common.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


def _as_status(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _to_storage_error(bucket: str, error: Exception) -> StorageError:
    """
    Normalize a storage client failure.

    ``StorageApiError`` carries ``status`` (int or numeric string), ``code``
    and ``message`` as attributes. Older clients only put the JSON error body
    (``statusCode``, ``error``, ``message``) in the first exception argument.
    """
    status = _as_status(getattr(error, "status", None))
    code: Optional[str] = getattr(error, "code", None) or None
    message: Optional[str] = getattr(error, "message", None) or None

    payload = error.args[0] if error.args else None
    if isinstance(payload, dict):
        if status is None:
            status = _as_status(payload.get("statusCode") or payload.get("status"))
        code = code or payload.get("error") or None
        message = message or payload.get("message") or None

    return StorageError(
        message=f"{bucket}: {message or error}",
        code=str(code) if code is not None else None,
        status=status,
    )


class SupabaseStorage(ObjectStorage):
    """Object storage over Supabase Storage buckets."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def list(
        self,
        bucket: str,
        prefix: str,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        try:
            files = await self._client.storage.from_(bucket).list(
                prefix,
                {"limit": limit, "offset": offset},
            )
        except Exception as e:
            raise _to_storage_error(bucket, e) from e
        return list(files or [])

    async def remove(self, bucket: str, paths: List[str]) -> List[Dict[str, Any]]:
        if not paths:
            return []
        try:
            removed = await self._client.storage.from_(bucket).remove(paths)
        except Exception as e:
            raise _to_storage_error(bucket, e) from e
        # Missing paths are not an error; they are just absent from the response
        removed = [obj for obj in (removed or []) if isinstance(obj, dict)]
        logger.debug(f"Removed {len(removed)} of {len(paths)} object(s) from bucket {bucket}")
        return removed
