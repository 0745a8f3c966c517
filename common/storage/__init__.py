"""
Storage module - Object storage contract and its Supabase implementation.
"""

from common.storage.base import ObjectStorage
from common.storage.supabase_storage import SupabaseStorage

__all__ = ["ObjectStorage", "SupabaseStorage"]
