"""Gallery write sequences.

Each step is its own committed round trip. A failure stops the sequence with
`BackendError` and nothing already done is undone: an uploaded object stays in
the bucket when the row insert fails, and an image keeps its new title, with
its old tag links already removed, when linking the new tags fails.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from washdesk.db.models import GalleryImage
from washdesk.db.repos import GalleryImageRepository, GalleryImageTagRepository
from washdesk.errors import StorageError
from washdesk.logging_config import log_with_fields
from washdesk.storage import BucketStorage, build_object_key

logger = logging.getLogger("washdesk.gallery")


@dataclass(frozen=True)
class ImageUpload:
    filename: str | None
    content_type: str | None
    data: bytes


async def relink_image_tags(
    session: AsyncSession,
    *,
    image_id: uuid.UUID,
    tag_ids: Sequence[uuid.UUID],
) -> None:
    links = GalleryImageTagRepository(session)
    await links.unlink_all(image_id)
    await links.commit()

    if tag_ids:
        await links.link(image_id, tag_ids)
        await links.commit()


async def create_gallery_image(
    session: AsyncSession,
    *,
    storage: BucketStorage,
    bucket: str,
    title: str,
    alt_text: str | None,
    is_visible: bool,
    upload: ImageUpload,
    tag_ids: Sequence[uuid.UUID],
) -> GalleryImage:
    key = build_object_key(upload.filename)
    await run_in_threadpool(
        storage.upload,
        bucket,
        key,
        upload.data,
        content_type=upload.content_type,
        upsert=False,
    )
    public_url = storage.get_public_url(bucket, key)

    images = GalleryImageRepository(session)
    image = await images.add(
        GalleryImage(
            title=title,
            image_url=public_url,
            image_path=key,
            alt_text=alt_text,
            is_visible=is_visible,
        )
    )
    await images.commit()

    if tag_ids:
        links = GalleryImageTagRepository(session)
        await links.link(image.id, tag_ids)
        await links.commit()

    return image


async def update_gallery_image(
    session: AsyncSession,
    *,
    image: GalleryImage,
    title: str,
    alt_text: str | None,
    is_visible: bool,
    tag_ids: Sequence[uuid.UUID],
) -> GalleryImage:
    images = GalleryImageRepository(session)
    await images.update(image, {"title": title, "alt_text": alt_text, "is_visible": is_visible})
    await images.commit()

    await relink_image_tags(session, image_id=image.id, tag_ids=tag_ids)
    return image


async def delete_gallery_image(
    session: AsyncSession,
    *,
    storage: BucketStorage,
    bucket: str,
    image: GalleryImage,
) -> None:
    if image.image_path:
        try:
            await run_in_threadpool(storage.remove, bucket, [image.image_path])
        except StorageError as exc:
            # Row removal goes ahead; the orphaned object is only logged.
            log_with_fields(
                logger,
                logging.WARNING,
                "gallery object removal failed",
                image_id=image.id,
                key=image.image_path,
                error=exc.message,
            )

    images = GalleryImageRepository(session)
    await images.delete(image)
    await images.commit()
