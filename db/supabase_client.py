"""
Supabase database client with CRUD operations.
Handles all database interactions for services, clients, appointments
and the salon settings row.

Expected tables:
    services(id, name, duration_minutes, created_at, updated_at)
    clients(id, name, phone, notes, tier, created_at, updated_at)
    appointments(id, client_name, client_id, service_id, service_name,
                 service_duration_minutes, date, start_time, end_time,
                 recurrence_group_id, attendance_status, calendar_event_id,
                 created_at, updated_at)
    settings(id, data jsonb)

Row Level Security (RLS) Notes:
==============================
This client uses the service key which bypasses RLS. The scheduler is a
single-salon backend, so no per-user policies are required.
"""

import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client as SupabaseClientType
from supabase import create_client

from config import settings
from models.appointment import Appointment
from models.client import Client
from models.service import Service
from models.settings import BusinessConfiguration
from utils.constants import SETTINGS_ROW_ID
from utils.datetime_utils import parse_iso_datetime, to_iso_string, utc_now
from utils.exceptions import DatabaseError

from .base import Store

_TIMESTAMP_FIELDS = ("created_at", "updated_at")


def _to_row(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Convert model values into JSON-compatible column values."""
    row = {}
    for key, value in fields.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, dt.datetime):
            value = to_iso_string(value)
        elif isinstance(value, dt.date):
            value = value.isoformat()
        row[key] = value
    return row


class SupabaseClient(Store):
    """
    Supabase database client wrapper.

    Uses service_role key which bypasses RLS.

    Includes simple in-memory cache for services and settings, invalidated on
    every write, to reduce database load during slot queries.
    """

    def __init__(self, client: Optional[SupabaseClientType] = None):
        """
        Initialize Supabase client.

        Args:
            client: pre-built Supabase client; created from settings if omitted
        """
        self.client: SupabaseClientType = client or create_client(
            settings.supabase_url, settings.supabase_key
        )

        # Format: {cache_key: (data, expiry_time)}
        self._cache: Dict[str, Tuple[Any, dt.datetime]] = {}
        self._cache_ttl = dt.timedelta(minutes=5)

    # ========== Cache Helpers ==========

    def _get_from_cache(self, key: str) -> Optional[Any]:
        """Get value from cache if not expired."""
        if key not in self._cache:
            return None

        data, expiry = self._cache[key]
        if utc_now() > expiry:
            del self._cache[key]
            return None

        return data

    def _set_cache(self, key: str, value: Any) -> None:
        """Set value in cache with TTL."""
        self._cache[key] = (value, utc_now() + self._cache_ttl)

    def _clear_cache(self, pattern: Optional[str] = None) -> None:
        """Clear cache entries matching pattern, or all if pattern is None."""
        if pattern is None:
            self._cache.clear()
        else:
            for k in [k for k in self._cache if pattern in k]:
                del self._cache[k]

    # ========== Appointment Operations ==========

    async def list_appointments(self) -> List[Appointment]:
        """Get all appointments ordered by date and start time."""
        try:
            response = (
                self.client.table("appointments")
                .select("*")
                .order("date", desc=False)
                .order("start_time", desc=False)
                .execute()
            )
            return [self._parse_appointment(item) for item in response.data]
        except Exception as e:
            raise DatabaseError(f"Failed to list appointments: {e}") from e

    async def list_appointments_by_date(self, date: dt.date) -> List[Appointment]:
        """Get appointments of one day ordered by start time."""
        try:
            response = (
                self.client.table("appointments")
                .select("*")
                .eq("date", date.isoformat())
                .order("start_time", desc=False)
                .execute()
            )
            return [self._parse_appointment(item) for item in response.data]
        except Exception as e:
            raise DatabaseError(f"Failed to get appointments for {date}: {e}") from e

    async def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        """Get appointment by ID."""
        try:
            response = (
                self.client.table("appointments")
                .select("*")
                .eq("id", appointment_id)
                .execute()
            )

            if response.data:
                return self._parse_appointment(response.data[0])
            return None
        except Exception as e:
            raise DatabaseError(f"Failed to get appointment: {e}") from e

    async def insert_appointment(self, appointment: Appointment) -> Appointment:
        """Insert a new appointment."""
        try:
            data = _to_row(appointment.model_dump(exclude_none=True))
            response = self.client.table("appointments").insert(data).execute()

            if not response.data:
                raise ValueError("no data returned")

            return self._parse_appointment(response.data[0])
        except Exception as e:
            raise DatabaseError(f"Failed to create appointment: {e}") from e

    async def update_appointment_fields(
        self, appointment_id: str, fields: Dict[str, Any]
    ) -> Optional[Appointment]:
        """Apply a partial update to an appointment."""
        try:
            response = (
                self.client.table("appointments")
                .update(_to_row(fields))
                .eq("id", appointment_id)
                .execute()
            )

            if not response.data:
                return None

            return self._parse_appointment(response.data[0])
        except Exception as e:
            raise DatabaseError(f"Failed to update appointment: {e}") from e

    async def delete_appointment(self, appointment_id: str) -> bool:
        """Delete an appointment; False when it did not exist."""
        try:
            response = (
                self.client.table("appointments")
                .delete()
                .eq("id", appointment_id)
                .execute()
            )
            return len(response.data) > 0
        except Exception as e:
            raise DatabaseError(f"Failed to delete appointment: {e}") from e

    # ========== Service Operations ==========

    async def list_services(self) -> List[Service]:
        """Get all services ordered by name."""
        try:
            response = (
                self.client.table("services")
                .select("*")
                .order("name", desc=False)
                .execute()
            )
            return [self._parse_service(item) for item in response.data]
        except Exception as e:
            raise DatabaseError(f"Failed to list services: {e}") from e

    async def get_service(self, service_id: str) -> Optional[Service]:
        """
        Get service by ID.

        Uses cache, since slot queries resolve the same service repeatedly.
        """
        cache_key = f"service:{service_id}"
        cached = self._get_from_cache(cache_key)
        if cached is not None:
            return cached

        try:
            response = (
                self.client.table("services").select("*").eq("id", service_id).execute()
            )

            if response.data:
                service = self._parse_service(response.data[0])
                self._set_cache(cache_key, service)
                return service
            return None
        except Exception as e:
            raise DatabaseError(f"Failed to get service: {e}") from e

    async def insert_service(self, service: Service) -> Service:
        """Insert a new service."""
        try:
            data = _to_row(service.model_dump(exclude_none=True))
            response = self.client.table("services").insert(data).execute()

            if not response.data:
                raise ValueError("no data returned")

            return self._parse_service(response.data[0])
        except Exception as e:
            raise DatabaseError(f"Failed to create service: {e}") from e

    async def update_service_fields(
        self, service_id: str, fields: Dict[str, Any]
    ) -> Optional[Service]:
        """Apply a partial update to a service."""
        try:
            response = (
                self.client.table("services")
                .update(_to_row(fields))
                .eq("id", service_id)
                .execute()
            )
            self._clear_cache(f"service:{service_id}")

            if not response.data:
                return None

            return self._parse_service(response.data[0])
        except Exception as e:
            raise DatabaseError(f"Failed to update service: {e}") from e

    async def delete_service(self, service_id: str) -> bool:
        """Delete a service. Appointments keep their snapshot."""
        try:
            response = (
                self.client.table("services").delete().eq("id", service_id).execute()
            )
            self._clear_cache(f"service:{service_id}")
            return len(response.data) > 0
        except Exception as e:
            raise DatabaseError(f"Failed to delete service: {e}") from e

    # ========== Client Operations ==========

    async def list_clients(self) -> List[Client]:
        """Get all clients ordered by name."""
        try:
            response = (
                self.client.table("clients")
                .select("*")
                .order("name", desc=False)
                .execute()
            )
            return [self._parse_client(item) for item in response.data]
        except Exception as e:
            raise DatabaseError(f"Failed to list clients: {e}") from e

    async def search_clients(self, query: str) -> List[Client]:
        """Case-insensitive name search; empty query lists all clients."""
        if not query.strip():
            return await self.list_clients()

        try:
            response = (
                self.client.table("clients")
                .select("*")
                .ilike("name", f"%{query.strip()}%")
                .order("name", desc=False)
                .execute()
            )
            return [self._parse_client(item) for item in response.data]
        except Exception as e:
            raise DatabaseError(f"Failed to search clients: {e}") from e

    async def get_client(self, client_id: str) -> Optional[Client]:
        """Get client by ID."""
        try:
            response = (
                self.client.table("clients").select("*").eq("id", client_id).execute()
            )

            if response.data:
                return self._parse_client(response.data[0])
            return None
        except Exception as e:
            raise DatabaseError(f"Failed to get client: {e}") from e

    async def insert_client(self, client: Client) -> Client:
        """Insert a new client."""
        try:
            data = _to_row(client.model_dump(exclude_none=True))
            response = self.client.table("clients").insert(data).execute()

            if not response.data:
                raise ValueError("no data returned")

            return self._parse_client(response.data[0])
        except Exception as e:
            raise DatabaseError(f"Failed to create client: {e}") from e

    async def update_client_fields(
        self, client_id: str, fields: Dict[str, Any]
    ) -> Optional[Client]:
        """Apply a partial update to a client."""
        try:
            response = (
                self.client.table("clients")
                .update(_to_row(fields))
                .eq("id", client_id)
                .execute()
            )

            if not response.data:
                return None

            return self._parse_client(response.data[0])
        except Exception as e:
            raise DatabaseError(f"Failed to update client: {e}") from e

    async def delete_client(self, client_id: str) -> bool:
        """Delete a client."""
        try:
            response = (
                self.client.table("clients").delete().eq("id", client_id).execute()
            )
            return len(response.data) > 0
        except Exception as e:
            raise DatabaseError(f"Failed to delete client: {e}") from e

    # ========== Settings Operations ==========

    async def load_settings(self) -> Optional[BusinessConfiguration]:
        """Load the salon settings row, or None if it was never saved."""
        cached = self._get_from_cache("settings")
        if cached is not None:
            return cached.model_copy(deep=True)

        try:
            response = (
                self.client.table("settings")
                .select("*")
                .eq("id", SETTINGS_ROW_ID)
                .execute()
            )

            if not response.data:
                return None

            config = BusinessConfiguration.model_validate(response.data[0]["data"])
            self._set_cache("settings", config)
            return config.model_copy(deep=True)
        except Exception as e:
            raise DatabaseError(f"Failed to load settings: {e}") from e

    async def save_settings(self, config: BusinessConfiguration) -> BusinessConfiguration:
        """Upsert the salon settings row."""
        try:
            row = {"id": SETTINGS_ROW_ID, "data": config.model_dump(mode="json")}
            self.client.table("settings").upsert(row).execute()
            self._set_cache("settings", config.model_copy(deep=True))
            return config
        except Exception as e:
            self._clear_cache("settings")
            raise DatabaseError(f"Failed to save settings: {e}") from e

    # ========== Helper Methods ==========

    def _parse_timestamps(self, item: dict) -> dict:
        item = item.copy()
        for field in _TIMESTAMP_FIELDS:
            if item.get(field):
                item[field] = parse_iso_datetime(item[field])
        return item

    def _parse_appointment(self, item: dict) -> Appointment:
        """
        Parse appointment data from database response.

        Postgres `time` columns come back as HH:MM:SS, trimmed here to HH:MM.
        """
        item = self._parse_timestamps(item)
        for field in ("start_time", "end_time"):
            if item.get(field):
                item[field] = item[field][:5]
        return Appointment(**item)

    def _parse_service(self, item: dict) -> Service:
        return Service(**self._parse_timestamps(item))

    def _parse_client(self, item: dict) -> Client:
        return Client(**self._parse_timestamps(item))


# Global database client instance
_db_client: Optional[Store] = None


def get_db_client() -> Store:
    """
    Get or create the storage backend.

    Supabase when configured, otherwise an in-memory store.
    """
    global _db_client
    if _db_client is None:
        if settings.supabase_enabled:
            _db_client = SupabaseClient()
        else:
            from .memory_store import InMemoryStore

            _db_client = InMemoryStore()
    return _db_client
