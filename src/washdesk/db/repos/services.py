from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from washdesk.db.models import Service
from washdesk.db.repos.base import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Service)

    async def list_newest_first(self) -> list[Service]:
        result = await self.session.execute(select(Service).order_by(Service.created_at.desc()))
        return list(result.scalars().all())

    async def list_active_by_name(self) -> list[Service]:
        result = await self.session.execute(
            select(Service).where(Service.is_active.is_(True)).order_by(Service.name.asc())
        )
        return list(result.scalars().all())
