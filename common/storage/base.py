"""
Abstract object storage interface.

Only what account cleanup needs: paginated listing under a prefix and batch
removal. Implementations raise ``common.utils.exceptions.StorageError``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class ObjectStorage(ABC):
    """Bucket/path object storage."""

    @abstractmethod
    async def list(
        self,
        bucket: str,
        prefix: str,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        List objects directly under a prefix.

        Args:
            bucket: Bucket name
            prefix: Folder-like path inside the bucket (no trailing slash)
            limit: Page size
            offset: Number of entries to skip

        Returns:
            Object descriptors; each has at least a ``name`` relative to the prefix
        """
        pass

    @abstractmethod
    async def remove(self, bucket: str, paths: List[str]) -> List[Dict[str, Any]]:
        """
        Remove objects by full path.

        Paths that do not exist are ignored, not reported as errors.

        Args:
            bucket: Bucket name
            paths: Object paths inside the bucket

        Returns:
            Descriptors of the objects that existed and were removed
        """
        pass
