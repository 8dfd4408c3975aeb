from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from washdesk.db.models import AdminRole
from washdesk.testing.web_test_helpers import sign_in_with_role, sign_up


@pytest.mark.asyncio
async def test_sign_up_falls_back_to_login_for_existing_account(client: AsyncClient) -> None:
    email = "helper-login@example.com"
    password = "pw-helper"

    await sign_up(client, email, password)
    await client.post("/auth/logout")

    await sign_up(client, email, password)

    protected = await client.get("/protected")
    assert protected.status_code == 200


@pytest.mark.asyncio
async def test_sign_in_with_role_opens_admin(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    user = await sign_in_with_role(
        client, db_session, email="helper-admin@example.com", role=AdminRole.admin
    )

    assert user.email == "helper-admin@example.com"
    resp = await client.get("/admin")
    assert resp.status_code == 200
