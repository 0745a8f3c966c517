"""
Abstract relational data store interface.

Row-level access to named tables with a small predicate vocabulary
(equality, set membership and a disjunction of equalities). Keeps
application services independent of the concrete client so they can be
exercised against an in-memory store in tests.

Example:
    from common.database import DataStore, Eq, In, AnyOf

    rows = await store.select("jobs", "id", filters=[Eq("user_id", user_id)])
    await store.delete("postulaciones", filters=[In("trabajo_id", job_ids)])
    await store.delete(
        "cv_contact_requests",
        filters=[AnyOf((Eq("employer_id", user_id), Eq("worker_id", user_id)))],
    )
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Eq:
    """``column = value``"""
    column: str
    value: Any


@dataclass(frozen=True)
class In:
    """``column IN (values)``"""
    column: str
    values: Tuple[Any, ...]

    def __init__(self, column: str, values: Sequence[Any]):
        object.__setattr__(self, "column", column)
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of equality predicates: ``a = x OR b = y``."""
    conditions: Tuple[Eq, ...]


@dataclass(frozen=True)
class Order:
    """Sort key for select queries."""
    column: str
    descending: bool = False


Filter = Union[Eq, In, AnyOf]


class DataStore(ABC):
    """
    Abstract relational data store.

    Implementations raise ``common.utils.exceptions.DataStoreError`` for any
    failure reported by the backend.
    """

    @abstractmethod
    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read rows from a table.

        Args:
            table: Table name
            columns: Column list in PostgREST syntax (embedded resources allowed)
            filters: Predicates, combined with AND
            order: Sort keys, applied in order
            limit: Maximum number of rows

        Returns:
            List of row dicts (empty when nothing matches)
        """
        pass

    async def select_one(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> Optional[Dict[str, Any]]:
        """Read the first matching row, or None."""
        rows = await self.select(table, columns, filters=filters, order=order, limit=1)
        return rows[0] if rows else None

    @abstractmethod
    async def insert(
        self,
        table: str,
        rows: Union[Dict[str, Any], List[Dict[str, Any]]],
    ) -> List[Dict[str, Any]]:
        """
        Insert one or more rows.

        Returns:
            The inserted rows as stored
        """
        pass

    @abstractmethod
    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Sequence[Filter],
    ) -> List[Dict[str, Any]]:
        """
        Update rows matching every filter.

        Raises:
            ValueError: If no filters are given (unscoped updates are refused)
        """
        pass

    @abstractmethod
    async def delete(
        self,
        table: str,
        filters: Sequence[Filter],
    ) -> List[Dict[str, Any]]:
        """
        Delete rows matching every filter.

        Raises:
            ValueError: If no filters are given (unscoped deletes are refused)
        """
        pass


def require_filters(operation: str, table: str, filters: Sequence[Filter]) -> None:
    """Refuse table-wide writes."""
    if not filters:
        raise ValueError(f"Refusing unscoped {operation} on table '{table}'")
