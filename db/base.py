"""
Storage interfaces used by the scheduler.

The scheduler only talks to these abstractions; InMemoryStore and
SupabaseClient implement all of them.
"""

import datetime as dt
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from models.appointment import Appointment
from models.client import Client
from models.service import Service
from models.settings import BusinessConfiguration


class AppointmentStore(ABC):
    """Appointment persistence."""

    @abstractmethod
    async def list_appointments(self) -> List[Appointment]:
        """All appointments ordered by date, then start time."""

    @abstractmethod
    async def list_appointments_by_date(self, date: dt.date) -> List[Appointment]:
        """Appointments on a date ordered by start time."""

    @abstractmethod
    async def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        ...

    @abstractmethod
    async def insert_appointment(self, appointment: Appointment) -> Appointment:
        ...

    @abstractmethod
    async def update_appointment_fields(
        self, appointment_id: str, fields: Dict[str, Any]
    ) -> Optional[Appointment]:
        """Apply a partial update; None when the appointment does not exist."""

    @abstractmethod
    async def delete_appointment(self, appointment_id: str) -> bool:
        ...


class ServiceStore(ABC):
    """Service persistence."""

    @abstractmethod
    async def list_services(self) -> List[Service]:
        ...

    @abstractmethod
    async def get_service(self, service_id: str) -> Optional[Service]:
        ...

    @abstractmethod
    async def insert_service(self, service: Service) -> Service:
        ...

    @abstractmethod
    async def update_service_fields(
        self, service_id: str, fields: Dict[str, Any]
    ) -> Optional[Service]:
        ...

    @abstractmethod
    async def delete_service(self, service_id: str) -> bool:
        ...


class ClientStore(ABC):
    """Client persistence."""

    @abstractmethod
    async def list_clients(self) -> List[Client]:
        """All clients ordered by name."""

    @abstractmethod
    async def search_clients(self, query: str) -> List[Client]:
        """Clients whose name contains query, case-insensitive."""

    @abstractmethod
    async def get_client(self, client_id: str) -> Optional[Client]:
        ...

    @abstractmethod
    async def insert_client(self, client: Client) -> Client:
        ...

    @abstractmethod
    async def update_client_fields(
        self, client_id: str, fields: Dict[str, Any]
    ) -> Optional[Client]:
        ...

    @abstractmethod
    async def delete_client(self, client_id: str) -> bool:
        ...


class SettingsStore(ABC):
    """Business configuration persistence (single row)."""

    @abstractmethod
    async def load_settings(self) -> Optional[BusinessConfiguration]:
        """Stored configuration, or None if nothing was saved yet."""

    @abstractmethod
    async def save_settings(self, config: BusinessConfiguration) -> BusinessConfiguration:
        ...


class Store(AppointmentStore, ServiceStore, ClientStore, SettingsStore):
    """A backend implementing every store interface."""
