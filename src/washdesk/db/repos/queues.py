from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from washdesk.db.models import QueueItem
from washdesk.db.repos.base import BaseRepository


class QueueRepository(BaseRepository[QueueItem]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, QueueItem)

    async def list_with_services(self) -> list[QueueItem]:
        result = await self.session.execute(
            select(QueueItem)
            .options(selectinload(QueueItem.service))
            .order_by(QueueItem.queued_at.desc())
        )
        return list(result.scalars().all())
