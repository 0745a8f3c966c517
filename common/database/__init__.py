"""
Database module - Relational data store contract and its Supabase implementation.

Usage:
    from common.database import SupabaseBackend, SupabaseDataStore, Eq

    backend = SupabaseBackend()
    await backend.connect(url, key)

    store = SupabaseDataStore(backend.client)
    rows = await store.select("users", "id", filters=[Eq("email", email)])
"""

from common.database.base import DataStore, Eq, In, AnyOf, Order, Filter
from common.database.supabase_store import SupabaseBackend, SupabaseDataStore

__all__ = [
    "DataStore",
    "Eq",
    "In",
    "AnyOf",
    "Order",
    "Filter",
    "SupabaseBackend",
    "SupabaseDataStore",
]
