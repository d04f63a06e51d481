"""
In-memory storage backend.

Used when Supabase is not configured and as the store in tests. Records are
copied on the way in and out, so callers never share state with the store.
"""

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from models.appointment import Appointment
from models.client import Client
from models.service import Service
from models.settings import BusinessConfiguration

from .base import Store

logger = logging.getLogger(__name__)


class InMemoryStore(Store):
    """
    Dict-backed store for appointments, services, clients and settings.

    Thread-safe only for a single event loop with one writer.

    Usage:
        store = InMemoryStore()
        await store.insert_appointment(appointment)
        day = await store.list_appointments_by_date(appointment.date)
    """

    def __init__(self) -> None:
        self._appointments: Dict[str, Appointment] = {}
        self._services: Dict[str, Service] = {}
        self._clients: Dict[str, Client] = {}
        self._settings: Optional[BusinessConfiguration] = None
        logger.debug("InMemoryStore initialized")

    # ========== Appointment Operations ==========

    async def list_appointments(self) -> List[Appointment]:
        appointments = sorted(
            self._appointments.values(), key=lambda a: (a.date, a.start_time)
        )
        return [a.model_copy(deep=True) for a in appointments]

    async def list_appointments_by_date(self, date: dt.date) -> List[Appointment]:
        appointments = [a for a in self._appointments.values() if a.date == date]
        appointments.sort(key=lambda a: a.start_time)
        return [a.model_copy(deep=True) for a in appointments]

    async def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        appointment = self._appointments.get(appointment_id)
        return appointment.model_copy(deep=True) if appointment else None

    async def insert_appointment(self, appointment: Appointment) -> Appointment:
        self._appointments[appointment.id] = appointment.model_copy(deep=True)
        return appointment.model_copy(deep=True)

    async def update_appointment_fields(
        self, appointment_id: str, fields: Dict[str, Any]
    ) -> Optional[Appointment]:
        current = self._appointments.get(appointment_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields, deep=True)
        self._appointments[appointment_id] = updated
        return updated.model_copy(deep=True)

    async def delete_appointment(self, appointment_id: str) -> bool:
        return self._appointments.pop(appointment_id, None) is not None

    # ========== Service Operations ==========

    async def list_services(self) -> List[Service]:
        services = sorted(self._services.values(), key=lambda s: s.name.lower())
        return [s.model_copy() for s in services]

    async def get_service(self, service_id: str) -> Optional[Service]:
        service = self._services.get(service_id)
        return service.model_copy() if service else None

    async def insert_service(self, service: Service) -> Service:
        self._services[service.id] = service.model_copy()
        return service.model_copy()

    async def update_service_fields(
        self, service_id: str, fields: Dict[str, Any]
    ) -> Optional[Service]:
        current = self._services.get(service_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields)
        self._services[service_id] = updated
        return updated.model_copy()

    async def delete_service(self, service_id: str) -> bool:
        return self._services.pop(service_id, None) is not None

    # ========== Client Operations ==========

    async def list_clients(self) -> List[Client]:
        clients = sorted(self._clients.values(), key=lambda c: c.name.lower())
        return [c.model_copy() for c in clients]

    async def search_clients(self, query: str) -> List[Client]:
        needle = query.strip().lower()
        clients = await self.list_clients()
        if not needle:
            return clients
        return [c for c in clients if needle in c.name.lower()]

    async def get_client(self, client_id: str) -> Optional[Client]:
        client = self._clients.get(client_id)
        return client.model_copy() if client else None

    async def insert_client(self, client: Client) -> Client:
        self._clients[client.id] = client.model_copy()
        return client.model_copy()

    async def update_client_fields(
        self, client_id: str, fields: Dict[str, Any]
    ) -> Optional[Client]:
        current = self._clients.get(client_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields)
        self._clients[client_id] = updated
        return updated.model_copy()

    async def delete_client(self, client_id: str) -> bool:
        return self._clients.pop(client_id, None) is not None

    # ========== Settings Operations ==========

    async def load_settings(self) -> Optional[BusinessConfiguration]:
        return self._settings.model_copy(deep=True) if self._settings else None

    async def save_settings(self, config: BusinessConfiguration) -> BusinessConfiguration:
        self._settings = config.model_copy(deep=True)
        return config.model_copy(deep=True)
