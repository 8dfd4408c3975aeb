from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from washdesk.db.models import GalleryImage, GalleryImageTag, GalleryTag
from washdesk.db.repos.base import BaseRepository


class GalleryImageRepository(BaseRepository[GalleryImage]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GalleryImage)

    async def list_with_tags(self) -> list[GalleryImage]:
        result = await self.session.execute(
            select(GalleryImage)
            .options(selectinload(GalleryImage.tags))
            .order_by(GalleryImage.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_with_tags(self, image_id: uuid.UUID) -> GalleryImage | None:
        result = await self.session.execute(
            select(GalleryImage)
            .options(selectinload(GalleryImage.tags))
            .where(GalleryImage.id == image_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


class GalleryTagRepository(BaseRepository[GalleryTag]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GalleryTag)

    async def list_by_name(self) -> list[GalleryTag]:
        result = await self.session.execute(select(GalleryTag).order_by(GalleryTag.name.asc()))
        return list(result.scalars().all())


class GalleryImageTagRepository(BaseRepository[GalleryImageTag]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GalleryImageTag)

    async def tag_ids_for_image(self, image_id: uuid.UUID) -> set[uuid.UUID]:
        result = await self.session.execute(
            select(GalleryImageTag.tag_id).where(GalleryImageTag.image_id == image_id)
        )
        return set(result.scalars().all())

    async def unlink_all(self, image_id: uuid.UUID) -> int:
        return await self.delete_where(GalleryImageTag.image_id == image_id)

    async def link(self, image_id: uuid.UUID, tag_ids: Iterable[uuid.UUID]) -> None:
        links = [GalleryImageTag(image_id=image_id, tag_id=tag_id) for tag_id in tag_ids]
        if links:
            await self.add_all(links)
