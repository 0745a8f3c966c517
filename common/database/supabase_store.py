"""
Supabase connection manager and PostgREST-backed data store.

The service talks to Supabase with the service role key, so every query
bypasses row level security. Authorization therefore has to happen in the
application services before any call reaches this module.

Example:
    from common.database import SupabaseBackend, SupabaseDataStore

    backend = SupabaseBackend()
    await backend.connect(url="https://xyz.supabase.co", key=service_role_key)

    store = SupabaseDataStore(backend.client)
    user = await store.select_one("users", "id, email", filters=[Eq("id", user_id)])
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from common.database.base import (
    AnyOf,
    DataStore,
    Eq,
    Filter,
    In,
    Order,
    require_filters,
)
from common.utils.exceptions import DataStoreError

logger = logging.getLogger(__name__)


class SupabaseBackend:
    """Owns the async Supabase client shared by the data, storage and auth adapters."""

    def __init__(self):
        self._client: Optional[AsyncClient] = None
        self._url: Optional[str] = None

    async def connect(self, url: str, key: str) -> None:
        """
        Create the Supabase client.

        Sessions are neither persisted nor refreshed: this is a server
        acting with the service role, not a signed-in browser.

        Args:
            url: Project URL
            key: Service role key
        """
        logger.info(f"Connecting to Supabase: {url}")
        try:
            self._client = await acreate_client(
                url,
                key,
                options=AsyncClientOptions(
                    auto_refresh_token=False,
                    persist_session=False,
                ),
            )
            self._url = url
            logger.info("Supabase client ready")
        except Exception as e:
            logger.error(f"Failed to create Supabase client: {e}")
            raise

    async def disconnect(self) -> None:
        """Drop the client."""
        if self._client:
            logger.info(f"Disconnecting from Supabase: {self._url}")
            self._client = None
            self._url = None

    @property
    def is_connected(self) -> bool:
        """Check if the client has been created."""
        return self._client is not None

    @property
    def client(self) -> AsyncClient:
        """Get the underlying Supabase client."""
        if self._client is None:
            raise RuntimeError("Supabase not connected")
        return self._client


def _or_expression(condition: AnyOf) -> str:
    """Render a disjunction in PostgREST ``or`` syntax: ``a.eq.x,b.eq.y``."""
    return ",".join(f"{c.column}.eq.{c.value}" for c in condition.conditions)


def _apply_filters(query, filters: Sequence[Filter]):
    for f in filters:
        if isinstance(f, Eq):
            query = query.eq(f.column, f.value)
        elif isinstance(f, In):
            query = query.in_(f.column, list(f.values))
        elif isinstance(f, AnyOf):
            query = query.or_(_or_expression(f))
        else:
            raise TypeError(f"Unsupported filter: {f!r}")
    return query


def _wrap_api_error(table: str, error: APIError) -> DataStoreError:
    message = getattr(error, "message", None) or str(error)
    code = getattr(error, "code", None)
    return DataStoreError(message=f"{table}: {message}", code=str(code) if code else None)


class SupabaseDataStore(DataStore):
    """DataStore implementation over Supabase's PostgREST API."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def _execute(self, table: str, query) -> List[Dict[str, Any]]:
        try:
            response = await query.execute()
        except APIError as e:
            raise _wrap_api_error(table, e) from e
        except httpx.HTTPError as e:
            raise DataStoreError(message=f"{table}: {e}") from e

        data = response.data if response is not None else None
        if data is None:
            return []
        if isinstance(data, dict):
            return [data]
        return list(data)

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = _apply_filters(self._client.table(table).select(columns), filters)
        for key in order:
            query = query.order(key.column, desc=key.descending)
        if limit is not None:
            query = query.limit(limit)
        return await self._execute(table, query)

    async def insert(
        self,
        table: str,
        rows: Union[Dict[str, Any], List[Dict[str, Any]]],
    ) -> List[Dict[str, Any]]:
        return await self._execute(table, self._client.table(table).insert(rows))

    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Sequence[Filter],
    ) -> List[Dict[str, Any]]:
        require_filters("update", table, filters)
        query = _apply_filters(self._client.table(table).update(values), filters)
        return await self._execute(table, query)

    async def delete(
        self,
        table: str,
        filters: Sequence[Filter],
    ) -> List[Dict[str, Any]]:
        require_filters("delete", table, filters)
        query = _apply_filters(self._client.table(table).delete(), filters)
        return await self._execute(table, query)
