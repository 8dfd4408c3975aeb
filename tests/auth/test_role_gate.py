from __future__ import annotations

import logging

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from washdesk.db.models import AdminRole
from washdesk.testing.web_test_helpers import grant_role, sign_in_with_role, sign_up

ADMIN_PAGES = ["/admin", "/admin/services", "/admin/queues", "/admin/gallery"]


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [*ADMIN_PAGES, "/admin/logs"])
async def test_anonymous_is_redirected_to_login(client: AsyncClient, path: str) -> None:
    resp = await client.get(path, follow_redirects=False)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/auth/login"


@pytest.mark.asyncio
async def test_anonymous_form_post_is_redirected_without_writing(client: AsyncClient) -> None:
    resp = await client.post(
        "/admin/services", data={"name": "Sneaky wash"}, follow_redirects=False
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/auth/login"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ADMIN_PAGES)
async def test_user_without_role_is_redirected_to_protected(
    client: AsyncClient, path: str
) -> None:
    await sign_up(client, "plain-user@example.com")

    resp = await client.get(path, follow_redirects=False)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/protected"


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [AdminRole.admin, AdminRole.superadmin])
@pytest.mark.parametrize("path", ADMIN_PAGES)
async def test_admin_tiers_can_open_admin_pages(
    client: AsyncClient, db_session: AsyncSession, role: AdminRole, path: str
) -> None:
    await sign_in_with_role(client, db_session, email="tier@example.com", role=role)

    resp = await client.get(path)

    assert resp.status_code == 200
    assert f"Role: {role.value}" in resp.text


@pytest.mark.asyncio
async def test_logs_require_superadmin(client: AsyncClient, db_session: AsyncSession) -> None:
    await sign_in_with_role(client, db_session, email="ops@example.com", role=AdminRole.admin)

    denied = await client.get("/admin/logs", follow_redirects=False)
    assert denied.status_code == 303
    assert denied.headers["location"] == "/protected"

    await grant_role(db_session, email="ops@example.com", role=AdminRole.superadmin)

    allowed = await client.get("/admin/logs")
    assert allowed.status_code == 200
    assert "Activity logs" in allowed.text


@pytest.mark.asyncio
async def test_role_denial_is_audited(
    client: AsyncClient, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="washdesk.security.audit")
    await sign_up(client, "audited@example.com")

    await client.get("/admin/queues", follow_redirects=False)

    messages = [record.getMessage() for record in caplog.records]
    assert any(
        "audit_event=admin.access" in message
        and "outcome=denied" in message
        and "reason=admin_role_required" in message
        and "path=/admin/queues" in message
        for message in messages
    )
