from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from washdesk.db.models import AdminRole, UserRoleAssignment
from washdesk.db.repos.base import BaseRepository


class UserRoleRepository(BaseRepository[UserRoleAssignment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserRoleAssignment)

    async def get_role(self, user_id: uuid.UUID) -> AdminRole | None:
        assignment = await self.get(user_id)
        return assignment.role if assignment is not None else None

    async def assign(self, user_id: uuid.UUID, role: AdminRole) -> UserRoleAssignment:
        assignment = await self.get(user_id)
        if assignment is None:
            return await self.add(UserRoleAssignment(user_id=user_id, role=role))
        return await self.update(assignment, {"role": role})

    async def revoke(self, user_id: uuid.UUID) -> bool:
        return await self.delete_where(UserRoleAssignment.user_id == user_id) > 0
