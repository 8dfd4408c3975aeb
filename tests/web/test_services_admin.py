from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

import washdesk.db as db
from washdesk.db.models import AdminRole, QueueItem, Service, ServiceCategory
from washdesk.testing.web_test_helpers import sign_in_with_role


async def _services() -> list[Service]:
    async with db.SessionMaker() as session:
        return list((await session.execute(select(Service))).scalars().all())


@pytest.mark.asyncio
async def test_services_page_shows_empty_state(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-empty@example.com")

    resp = await client.get("/admin/services")

    assert resp.status_code == 200
    assert "No services yet." in resp.text


@pytest.mark.asyncio
async def test_create_service_persists_and_renders(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-create@example.com")

    resp = await client.post(
        "/admin/services",
        data={
            "name": "  Premium wash  ",
            "category": "bike",
            "description": "Foam and wax",
            "price": "12.5",
            "duration_minutes": "45",
            "is_active": "on",
        },
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/services"

    services = await _services()
    assert len(services) == 1
    service = services[0]
    assert service.name == "Premium wash"
    assert service.category == ServiceCategory.bike
    assert service.description == "Foam and wax"
    assert service.price == Decimal("12.50")
    assert service.duration_minutes == 45
    assert service.is_active is True

    page = await client.get("/admin/services")
    assert "Premium wash" in page.text
    assert "45 mins" in page.text
    assert "12.50" in page.text


@pytest.mark.asyncio
async def test_create_service_defaults_missing_numbers_and_unchecked_box(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-defaults@example.com")

    await client.post("/admin/services", data={"name": "Quick rinse"})

    (service,) = await _services()
    assert service.category == ServiceCategory.car
    assert service.description is None
    assert service.price == Decimal("0")
    assert service.duration_minutes == 0
    assert service.is_active is False


@pytest.mark.asyncio
async def test_create_service_without_name_is_a_no_op(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-noname@example.com")

    resp = await client.post(
        "/admin/services", data={"name": "   ", "price": "10"}, follow_redirects=False
    )

    assert resp.status_code == 303
    assert await _services() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [
        {"name": "Odd", "category": "truck"},
        {"name": "Odd", "price": "cheap"},
        {"name": "Odd", "price": "-1"},
        {"name": "Odd", "duration_minutes": "1.5"},
    ],
)
async def test_create_service_rejects_invalid_values(
    client: AsyncClient, db_session: AsyncSession, data: dict[str, str]
) -> None:
    await sign_in_with_role(client, db_session, email="svc-invalid@example.com")

    resp = await client.post("/admin/services", data=data, follow_redirects=False)

    assert resp.status_code == 400
    assert await _services() == []


@pytest.mark.asyncio
async def test_toggle_service_negates_posted_state(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-toggle@example.com")
    await client.post("/admin/services", data={"name": "Interior", "is_active": "on"})
    (service,) = await _services()

    hide = await client.post(
        f"/admin/services/{service.id}/toggle",
        data={"is_active": "true"},
        follow_redirects=False,
    )
    assert hide.status_code == 303
    (hidden,) = await _services()
    assert hidden.is_active is False

    await client.post(f"/admin/services/{service.id}/toggle", data={"is_active": "false"})
    (shown,) = await _services()
    assert shown.is_active is True


@pytest.mark.asyncio
async def test_delete_service_keeps_queue_items(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-delete@example.com")
    await client.post("/admin/services", data={"name": "Engine bay", "is_active": "on"})
    (service,) = await _services()
    await client.post(
        "/admin/queues",
        data={"service_id": str(service.id), "customer_name": "Ana", "vehicle_plate": "AB-123"},
    )

    resp = await client.post(f"/admin/services/{service.id}/delete", follow_redirects=False)
    assert resp.status_code == 303
    assert await _services() == []

    async with db.SessionMaker() as session:
        (item,) = (await session.execute(select(QueueItem))).scalars().all()
    assert item.service_id is None

    queue_page = await client.get("/admin/queues")
    assert "No service" in queue_page.text


@pytest.mark.asyncio
async def test_service_actions_on_missing_rows_redirect(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(
        client, db_session, email="svc-missing@example.com", role=AdminRole.superadmin
    )
    missing = "00000000-0000-0000-0000-000000000000"

    toggle = await client.post(
        f"/admin/services/{missing}/toggle", data={"is_active": "true"}, follow_redirects=False
    )
    delete = await client.post(f"/admin/services/{missing}/delete", follow_redirects=False)

    assert toggle.status_code == 303
    assert delete.status_code == 303


@pytest.mark.asyncio
async def test_toggle_treats_anything_but_true_as_hidden(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await sign_in_with_role(client, db_session, email="svc-strict@example.com")
    await client.post("/admin/services", data={"name": "Polish", "is_active": "on"})
    (service,) = await _services()

    await client.post(f"/admin/services/{service.id}/toggle", data={"is_active": "TRUE"})

    (still_active,) = await _services()
    assert still_active.is_active is True
