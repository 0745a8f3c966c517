"""
Public object URL parsing.

Avatar references are stored as public Supabase Storage URLs. To delete the
object we need the bucket and the path inside it:

    https://<host>/storage/v1/object/public/<bucket>/<path>[?<query>]

Anything that does not follow that shape is not ours to delete, so it parses
to None instead of raising.
"""

import re
from typing import NamedTuple, Optional
from urllib.parse import unquote

from config.account_config import PUBLIC_OBJECT_URL_MARKER

_PUBLIC_OBJECT_RE = re.compile(
    re.escape(PUBLIC_OBJECT_URL_MARKER) + r"([^/?#]+)/([^?#]+)",
    re.IGNORECASE,
)


class StorageObjectRef(NamedTuple):
    bucket: str
    path: str


def parse_public_object_url(url: Optional[str]) -> Optional[StorageObjectRef]:
    """
    Extract (bucket, path) from a public object URL.

    Args:
        url: Stored avatar reference (may be None or empty)

    Returns:
        StorageObjectRef, or None when the value is not a public object URL
    """
    value = (url or "").strip()
    if not value:
        return None

    match = _PUBLIC_OBJECT_RE.search(value)
    if not match:
        return None

    bucket = unquote(match.group(1))
    path = unquote(match.group(2)).rstrip("/")
    if not bucket or not path:
        return None

    return StorageObjectRef(bucket=bucket, path=path)
