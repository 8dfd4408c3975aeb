from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

import washdesk.db as db
from washdesk.db.models import GalleryImage, GalleryTag
from washdesk.db.repos import (
    GalleryImageRepository,
    GalleryImageTagRepository,
    GalleryTagRepository,
)
from washdesk.errors import BackendError
from washdesk.services.gallery_service import relink_image_tags


async def _image_with_tags(
    session: AsyncSession, *tag_names: str
) -> tuple[GalleryImage, list[GalleryTag]]:
    tags_repo = GalleryTagRepository(session)
    tags = [await tags_repo.add(GalleryTag(name=name)) for name in tag_names]
    image = await GalleryImageRepository(session).add(
        GalleryImage(title="Foam bath", image_url="/storage/gallery/gallery/x.jpg")
    )
    await tags_repo.commit()
    return image, tags


@pytest.mark.asyncio
async def test_relink_replaces_existing_links(db_session: AsyncSession) -> None:
    image, (red, blue, green) = await _image_with_tags(db_session, "red", "blue", "green")
    links = GalleryImageTagRepository(db_session)
    await links.link(image.id, [red.id, blue.id])
    await links.commit()

    await relink_image_tags(db_session, image_id=image.id, tag_ids=[green.id])

    async with db.SessionMaker() as verify_session:
        assert await GalleryImageTagRepository(verify_session).tag_ids_for_image(image.id) == {
            green.id
        }
        loaded = await GalleryImageRepository(verify_session).get_with_tags(image.id)
        assert loaded is not None
        assert [tag.name for tag in loaded.tags] == ["green"]


@pytest.mark.asyncio
async def test_relink_with_no_tags_clears_links(db_session: AsyncSession) -> None:
    image, (red,) = await _image_with_tags(db_session, "red")
    links = GalleryImageTagRepository(db_session)
    await links.link(image.id, [red.id])
    await links.commit()

    await relink_image_tags(db_session, image_id=image.id, tag_ids=[])

    async with db.SessionMaker() as verify_session:
        assert await GalleryImageTagRepository(verify_session).tag_ids_for_image(image.id) == set()


@pytest.mark.asyncio
async def test_tags_are_listed_by_name(db_session: AsyncSession) -> None:
    await _image_with_tags(db_session, "wheels", "interior", "polish")

    names = [tag.name for tag in await GalleryTagRepository(db_session).list_by_name()]
    assert names == ["interior", "polish", "wheels"]


@pytest.mark.asyncio
async def test_duplicate_tag_name_surfaces_backend_error(db_session: AsyncSession) -> None:
    repo = GalleryTagRepository(db_session)
    await repo.add(GalleryTag(name="exterior"))
    await repo.commit()

    with pytest.raises(BackendError):
        await repo.add(GalleryTag(name="exterior"))
    await repo.rollback()


@pytest.mark.asyncio
async def test_deleting_tag_removes_its_links(db_session: AsyncSession) -> None:
    image, (red, blue) = await _image_with_tags(db_session, "red", "blue")
    links = GalleryImageTagRepository(db_session)
    await links.link(image.id, [red.id, blue.id])
    await links.commit()

    async with db.SessionMaker() as other_session:
        tags_repo = GalleryTagRepository(other_session)
        tag = await tags_repo.get(red.id)
        assert tag is not None
        await tags_repo.delete(tag)
        await tags_repo.commit()

    async with db.SessionMaker() as verify_session:
        assert await GalleryImageTagRepository(verify_session).tag_ids_for_image(image.id) == {
            blue.id
        }
