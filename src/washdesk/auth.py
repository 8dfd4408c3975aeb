"""Session identity and the admin/superadmin gate.

Every admin page and form handler depends on `require_admin` or
`require_superadmin`. Anonymous sessions are sent to the login page; signed-in
users without the needed role are sent to `/protected`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from washdesk.db import get_session
from washdesk.db.models import AdminRole, User
from washdesk.db.repos import UserRepository, UserRoleRepository
from washdesk.security.audit import audit_admin_denied
from washdesk.security.audit_constants import (
    ADMIN_EVENT_ACCESS,
    ADMIN_REASON_ADMIN_ROLE_REQUIRED,
    ADMIN_REASON_NOT_AUTHENTICATED,
    ADMIN_REASON_SUPERADMIN_ROLE_REQUIRED,
)

LOGIN_PATH = "/auth/login"
NO_ACCESS_PATH = "/protected"

_password_hasher = PasswordHasher()


class AuthRedirect(Exception):
    """Raised from a dependency to send the browser elsewhere (303)."""

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location = location


@dataclass(frozen=True)
class RoleContext:
    user: User | None
    role: AdminRole | None

    @property
    def is_superadmin(self) -> bool:
        return self.role == AdminRole.superadmin

    @property
    def is_admin(self) -> bool:
        return self.role in (AdminRole.admin, AdminRole.superadmin)


@dataclass(frozen=True)
class AdminContext:
    user: User
    role: AdminRole

    @property
    def is_superadmin(self) -> bool:
        return self.role == AdminRole.superadmin


def hash_password(password: str) -> str:
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHashError, VerificationError):
        return False


def get_current_user_id(request: Request) -> uuid.UUID | None:
    raw = request.session.get("user_id")
    if raw is None:
        return None

    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


async def get_user_role(request: Request, session: AsyncSession) -> RoleContext:
    user_id = get_current_user_id(request)
    if user_id is None:
        return RoleContext(user=None, role=None)

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        return RoleContext(user=None, role=None)

    role = await UserRoleRepository(session).get_role(user.id)
    return RoleContext(user=user, role=role)


async def current_role(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> RoleContext:
    return await get_user_role(request, session)


async def require_admin(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> AdminContext:
    context = await get_user_role(request, session)
    if context.user is None:
        audit_admin_denied(
            event=ADMIN_EVENT_ACCESS,
            reason=ADMIN_REASON_NOT_AUTHENTICATED,
            path=request.url.path,
        )
        raise AuthRedirect(LOGIN_PATH)

    if context.role is None or not context.is_admin:
        audit_admin_denied(
            event=ADMIN_EVENT_ACCESS,
            reason=ADMIN_REASON_ADMIN_ROLE_REQUIRED,
            actor=context.user,
            path=request.url.path,
        )
        raise AuthRedirect(NO_ACCESS_PATH)

    return AdminContext(user=context.user, role=context.role)


async def require_superadmin(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> AdminContext:
    context = await get_user_role(request, session)
    if context.user is None:
        audit_admin_denied(
            event=ADMIN_EVENT_ACCESS,
            reason=ADMIN_REASON_NOT_AUTHENTICATED,
            path=request.url.path,
        )
        raise AuthRedirect(LOGIN_PATH)

    if context.role != AdminRole.superadmin:
        audit_admin_denied(
            event=ADMIN_EVENT_ACCESS,
            reason=ADMIN_REASON_SUPERADMIN_ROLE_REQUIRED,
            actor=context.user,
            path=request.url.path,
            role=context.role,
        )
        raise AuthRedirect(NO_ACCESS_PATH)

    return AdminContext(user=context.user, role=AdminRole.superadmin)
