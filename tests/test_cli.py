from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import washdesk.db as db
from washdesk.auth import hash_password
from washdesk.cli import UnknownUserError, grant_role, main, revoke_role
from washdesk.db.models import AdminRole, User
from washdesk.db.repos import UserRoleRepository


async def _create_user(db_session: AsyncSession, email: str) -> User:
    user = User(email=email, display_name="Ops", password_hash=hash_password("pw123456"))
    db_session.add(user)
    await db_session.commit()
    return user


async def _role_for(user: User) -> AdminRole | None:
    async with db.SessionMaker() as session:
        return await UserRoleRepository(session).get_role(user.id)


@pytest.mark.asyncio
async def test_grant_role_assigns_and_upgrades(db_session: AsyncSession) -> None:
    user = await _create_user(db_session, "cli-grant@example.com")

    await grant_role("cli-grant@example.com", AdminRole.admin)
    assert await _role_for(user) == AdminRole.admin

    await grant_role("cli-grant@example.com", AdminRole.superadmin)
    assert await _role_for(user) == AdminRole.superadmin


@pytest.mark.asyncio
async def test_revoke_role_reports_whether_a_role_existed(db_session: AsyncSession) -> None:
    user = await _create_user(db_session, "cli-revoke@example.com")
    await grant_role("cli-revoke@example.com", AdminRole.admin)

    assert await revoke_role("cli-revoke@example.com") is True
    assert await _role_for(user) is None
    assert await revoke_role("cli-revoke@example.com") is False


@pytest.mark.asyncio
async def test_role_commands_reject_unknown_user(test_engine: AsyncEngine) -> None:
    _ = test_engine
    with pytest.raises(UnknownUserError):
        await grant_role("nobody@example.com", AdminRole.admin)
    with pytest.raises(UnknownUserError):
        await revoke_role("nobody@example.com")


def test_main_rejects_unknown_role_choice(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["grant-role", "--email", "ops@example.com", "--role", "owner"])

    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_main_requires_a_command() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2
