"""Database client and operations."""

from .base import AppointmentStore, ClientStore, ServiceStore, SettingsStore, Store
from .memory_store import InMemoryStore
from .supabase_client import SupabaseClient, get_db_client

__all__ = [
    "AppointmentStore",
    "ClientStore",
    "InMemoryStore",
    "ServiceStore",
    "SettingsStore",
    "Store",
    "SupabaseClient",
    "get_db_client",
]
