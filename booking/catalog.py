"""
Service catalog and client registry.

Validated create/update/delete on top of the stores. Renaming a service or
changing its duration never touches existing appointments, which keep the
snapshot taken when they were booked.
"""

import logging
from typing import List, Optional

from db.base import ClientStore, ServiceStore
from models.client import Client, ClientCreate, ClientUpdate
from models.service import Service, ServiceCreate, ServiceUpdate
from utils.constants import (
    MAX_CLIENT_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_SERVICE_NAME_LENGTH,
    MESSAGES,
)
from utils.datetime_utils import utc_now
from utils.exceptions import (
    ClientNotFoundError,
    ServiceRecordNotFoundError,
    ValidationError,
)
from utils.helpers import generate_id
from utils.validation import optional_text, sanitize_text, validate_phone

logger = logging.getLogger(__name__)


def _clean_service_name(name: Optional[str]) -> str:
    cleaned = sanitize_text(name, MAX_SERVICE_NAME_LENGTH)
    if not cleaned:
        raise ValidationError(MESSAGES["SERVICE_NAME_REQUIRED"])
    return cleaned


def _check_duration(minutes: Optional[int]) -> int:
    if not isinstance(minutes, int) or isinstance(minutes, bool) or minutes <= 0:
        raise ValidationError(MESSAGES["SERVICE_DURATION_REQUIRED"])
    return minutes


class ServiceCatalog:
    """Services offered by the salon."""

    def __init__(self, store: ServiceStore):
        self.store = store

    async def list_services(self) -> List[Service]:
        return await self.store.list_services()

    async def get_service(self, service_id: str) -> Optional[Service]:
        return await self.store.get_service(service_id)

    async def create_service(self, data: ServiceCreate) -> Service:
        """Create a service after validating name and duration."""
        now = utc_now()
        service = Service(
            id=generate_id(),
            name=_clean_service_name(data.name),
            duration_minutes=_check_duration(data.duration_minutes),
            created_at=now,
            updated_at=now,
        )
        created = await self.store.insert_service(service)
        logger.info(f"Service created: {created.id} ({created.name})")
        return created

    async def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        """
        Update name and/or duration of a service.

        Raises:
            ServiceRecordNotFoundError: If the service does not exist
        """
        fields = {}
        if data.name is not None:
            fields["name"] = _clean_service_name(data.name)
        if data.duration_minutes is not None:
            fields["duration_minutes"] = _check_duration(data.duration_minutes)
        fields["updated_at"] = utc_now()

        updated = await self.store.update_service_fields(service_id, fields)
        if updated is None:
            raise ServiceRecordNotFoundError(f"Service {service_id} not found")
        return updated

    async def delete_service(self, service_id: str) -> None:
        """Delete a service; its appointments are kept."""
        if not await self.store.delete_service(service_id):
            raise ServiceRecordNotFoundError(f"Service {service_id} not found")
        logger.info(f"Service deleted: {service_id}")


class ClientRegistry:
    """Clients of the salon."""

    def __init__(self, store: ClientStore):
        self.store = store

    async def list_clients(self) -> List[Client]:
        return await self.store.list_clients()

    async def search_clients(self, query: str) -> List[Client]:
        return await self.store.search_clients(query or "")

    async def get_client(self, client_id: str) -> Optional[Client]:
        return await self.store.get_client(client_id)

    async def create_client(self, data: ClientCreate) -> Client:
        now = utc_now()
        client = Client(
            id=generate_id(),
            name=self._clean_name(data.name),
            phone=self._clean_phone(data.phone),
            notes=optional_text(data.notes, MAX_NOTES_LENGTH),
            tier=data.tier,
            created_at=now,
            updated_at=now,
        )
        return await self.store.insert_client(client)

    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """
        Update the provided fields. An empty phone or notes clears the value.

        Raises:
            ClientNotFoundError: If the client does not exist
        """
        fields = {}
        provided = data.model_fields_set
        if "name" in provided and data.name is not None:
            fields["name"] = self._clean_name(data.name)
        if "phone" in provided:
            fields["phone"] = self._clean_phone(data.phone)
        if "notes" in provided:
            fields["notes"] = optional_text(data.notes, MAX_NOTES_LENGTH)
        if "tier" in provided and data.tier is not None:
            fields["tier"] = data.tier.value
        fields["updated_at"] = utc_now()

        updated = await self.store.update_client_fields(client_id, fields)
        if updated is None:
            raise ClientNotFoundError(f"Client {client_id} not found")
        return updated

    async def delete_client(self, client_id: str) -> None:
        if not await self.store.delete_client(client_id):
            raise ClientNotFoundError(f"Client {client_id} not found")

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        cleaned = sanitize_text(name, MAX_CLIENT_NAME_LENGTH)
        if not cleaned:
            raise ValidationError("Client name is required")
        return cleaned

    @staticmethod
    def _clean_phone(phone: Optional[str]) -> Optional[str]:
        cleaned = optional_text(phone)
        if cleaned and not validate_phone(cleaned):
            raise ValidationError(f"Invalid phone number: {cleaned}")
        return cleaned
