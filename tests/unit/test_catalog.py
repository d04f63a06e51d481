"""
Unit tests for the service catalog and client registry.
"""

import pytest

from booking.catalog import ClientRegistry, ServiceCatalog
from models.client import ClientCreate, ClientTier, ClientUpdate
from models.service import ServiceCreate, ServiceUpdate
from utils.exceptions import ClientNotFoundError, ServiceRecordNotFoundError, ValidationError


@pytest.fixture
def catalog(store):
    return ServiceCatalog(store)


@pytest.fixture
def registry(store):
    return ClientRegistry(store)


# ========== Services ==========


@pytest.mark.asyncio
async def test_create_service(catalog):
    service = await catalog.create_service(ServiceCreate(name="  Pedicure ", duration_minutes=45))

    assert service.id
    assert service.name == "Pedicure"
    assert service.duration_minutes == 45
    assert await catalog.get_service(service.id) == service


@pytest.mark.asyncio
async def test_create_service_requires_name(catalog):
    with pytest.raises(ValidationError):
        await catalog.create_service(ServiceCreate(name=" ", duration_minutes=45))


@pytest.mark.asyncio
@pytest.mark.parametrize("duration", [0, -30])
async def test_create_service_requires_positive_duration(catalog, duration):
    with pytest.raises(ValidationError):
        await catalog.create_service(ServiceCreate(name="Pedicure", duration_minutes=duration))


@pytest.mark.asyncio
async def test_list_services_sorted_by_name(catalog):
    await catalog.create_service(ServiceCreate(name="Pedicure", duration_minutes=45))
    await catalog.create_service(ServiceCreate(name="gel manicure", duration_minutes=60))

    names = [s.name for s in await catalog.list_services()]

    assert names == ["gel manicure", "Pedicure"]


@pytest.mark.asyncio
async def test_update_service(catalog):
    service = await catalog.create_service(ServiceCreate(name="Pedicure", duration_minutes=45))

    updated = await catalog.update_service(service.id, ServiceUpdate(duration_minutes=50))

    assert updated.name == "Pedicure"
    assert updated.duration_minutes == 50


@pytest.mark.asyncio
async def test_update_missing_service(catalog):
    with pytest.raises(ServiceRecordNotFoundError):
        await catalog.update_service("missing", ServiceUpdate(name="New"))


@pytest.mark.asyncio
async def test_delete_service_keeps_appointments(catalog, scheduler, make_request):
    service = await catalog.create_service(ServiceCreate(name="Pedicure", duration_minutes=45))
    booked = await scheduler.create_appointment(make_request("10:00", service_id=service.id))

    await catalog.delete_service(service.id)

    assert await catalog.get_service(service.id) is None
    stored = await scheduler.get_appointment(booked.data.id)
    assert stored.service_name == "Pedicure"
    assert stored.end_time == "10:45"


@pytest.mark.asyncio
async def test_delete_missing_service(catalog):
    with pytest.raises(ServiceRecordNotFoundError):
        await catalog.delete_service("missing")


# ========== Clients ==========


@pytest.mark.asyncio
async def test_create_client(registry):
    client = await registry.create_client(
        ClientCreate(name="Maria Silva", phone="+420 123 456 789", tier=ClientTier.PREMIUM)
    )

    assert client.name == "Maria Silva"
    assert client.phone == "+420 123 456 789"
    assert client.tier == "premium"
    assert client.notes is None


@pytest.mark.asyncio
async def test_create_client_invalid_phone(registry):
    with pytest.raises(ValidationError):
        await registry.create_client(ClientCreate(name="Maria", phone="12ab"))


@pytest.mark.asyncio
async def test_create_client_requires_name(registry):
    with pytest.raises(ValidationError):
        await registry.create_client(ClientCreate(name=""))


@pytest.mark.asyncio
async def test_search_clients_case_insensitive(registry):
    await registry.create_client(ClientCreate(name="Maria Silva"))
    await registry.create_client(ClientCreate(name="Anna Novak"))

    found = await registry.search_clients("SILVA")
    everyone = await registry.search_clients("")

    assert [c.name for c in found] == ["Maria Silva"]
    assert [c.name for c in everyone] == ["Anna Novak", "Maria Silva"]


@pytest.mark.asyncio
async def test_update_client_only_provided_fields(registry):
    client = await registry.create_client(
        ClientCreate(name="Maria", phone="+420123456789", notes="Prefers mornings")
    )

    updated = await registry.update_client(client.id, ClientUpdate(tier=ClientTier.PREMIUM))

    assert updated.tier == "premium"
    assert updated.phone == "+420123456789"
    assert updated.notes == "Prefers mornings"


@pytest.mark.asyncio
async def test_update_client_clears_notes(registry):
    client = await registry.create_client(ClientCreate(name="Maria", notes="Allergic to latex"))

    updated = await registry.update_client(client.id, ClientUpdate(notes=""))

    assert updated.notes is None


@pytest.mark.asyncio
async def test_update_missing_client(registry):
    with pytest.raises(ClientNotFoundError):
        await registry.update_client("missing", ClientUpdate(name="New"))


@pytest.mark.asyncio
async def test_delete_client(registry):
    client = await registry.create_client(ClientCreate(name="Maria"))

    await registry.delete_client(client.id)

    assert await registry.get_client(client.id) is None
    with pytest.raises(ClientNotFoundError):
        await registry.delete_client(client.id)
