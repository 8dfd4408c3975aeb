from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from washdesk.auth import AdminContext, require_admin
from washdesk.db import get_session
from washdesk.db.models import GalleryTag
from washdesk.db.repos import GalleryImageRepository, GalleryTagRepository
from washdesk.logging_config import log_with_fields
from washdesk.security.audit import audit_admin_success
from washdesk.security.audit_constants import (
    ADMIN_EVENT_GALLERY_IMAGE_CREATE,
    ADMIN_EVENT_GALLERY_IMAGE_DELETE,
    ADMIN_EVENT_GALLERY_IMAGE_UPDATE,
    ADMIN_EVENT_GALLERY_IMAGE_VISIBILITY_TOGGLE,
    ADMIN_EVENT_GALLERY_TAG_CREATE,
    ADMIN_EVENT_GALLERY_TAG_DELETE,
    ADMIN_EVENT_GALLERY_TAG_UPDATE,
)
from washdesk.services.gallery_service import (
    ImageUpload,
    create_gallery_image,
    delete_gallery_image,
    update_gallery_image,
)
from washdesk.settings import get_settings
from washdesk.storage import get_storage
from washdesk.web.routes.admin import render_admin_page
from washdesk.web.routes.common import (
    checkbox_checked,
    clean_text,
    optional_text,
    parse_uuid_list,
    posted_true,
    redirect_to,
)

router = APIRouter()
logger = logging.getLogger("washdesk.admin.gallery")

GALLERY_PATH = "/admin/gallery"
TAGS_PATH = f"{GALLERY_PATH}/tags"


@router.get(GALLERY_PATH, response_class=HTMLResponse)
async def gallery_page(
    request: Request,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> Response:
    tags = await GalleryTagRepository(session).list_by_name()
    images = await GalleryImageRepository(session).list_with_tags()
    return render_admin_page(
        request,
        "admin/gallery.html",
        admin=admin,
        active_nav="gallery",
        context={
            "tags": tags,
            "images": images,
            "selected_tag_ids": {image.id: {tag.id for tag in image.tags} for image in images},
        },
    )


@router.post(TAGS_PATH, response_class=RedirectResponse)
async def create_tag(
    tag_name: str = Form(""),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    name = clean_text(tag_name)
    if not name:
        return redirect_to(GALLERY_PATH)

    repo = GalleryTagRepository(session)
    tag = await repo.add(GalleryTag(name=name))
    await repo.commit()

    audit_admin_success(event=ADMIN_EVENT_GALLERY_TAG_CREATE, actor=admin.user, tag_id=tag.id)
    return redirect_to(GALLERY_PATH)


@router.post(f"{TAGS_PATH}/{{tag_id}}", response_class=RedirectResponse)
async def update_tag(
    tag_id: uuid.UUID,
    name: str = Form(""),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    new_name = clean_text(name)
    if not new_name:
        return redirect_to(GALLERY_PATH)

    repo = GalleryTagRepository(session)
    tag = await repo.get(tag_id)
    if tag is None:
        return redirect_to(GALLERY_PATH)

    await repo.update(tag, {"name": new_name})
    await repo.commit()

    audit_admin_success(event=ADMIN_EVENT_GALLERY_TAG_UPDATE, actor=admin.user, tag_id=tag.id)
    return redirect_to(GALLERY_PATH)


@router.post(f"{TAGS_PATH}/{{tag_id}}/delete", response_class=RedirectResponse)
async def delete_tag(
    tag_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    repo = GalleryTagRepository(session)
    tag = await repo.get(tag_id)
    if tag is None:
        return redirect_to(GALLERY_PATH)

    await repo.delete(tag)
    await repo.commit()

    audit_admin_success(event=ADMIN_EVENT_GALLERY_TAG_DELETE, actor=admin.user, tag_id=tag_id)
    return redirect_to(GALLERY_PATH)


@router.post(GALLERY_PATH, response_class=RedirectResponse)
async def create_gallery_item(
    title: str = Form(""),
    alt_text: str = Form(""),
    is_visible: str | None = Form(None),
    selected_tags: list[str] = Form([]),
    image: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    normalized_title = clean_text(title)
    if not normalized_title or image is None:
        return redirect_to(GALLERY_PATH)

    data = await image.read()
    if not data:
        return redirect_to(GALLERY_PATH)

    settings = get_settings()
    created = await create_gallery_image(
        session,
        storage=get_storage(settings),
        bucket=settings.gallery_bucket,
        title=normalized_title,
        alt_text=optional_text(alt_text),
        is_visible=checkbox_checked(is_visible),
        upload=ImageUpload(filename=image.filename, content_type=image.content_type, data=data),
        tag_ids=parse_uuid_list(selected_tags),
    )

    audit_admin_success(
        event=ADMIN_EVENT_GALLERY_IMAGE_CREATE,
        actor=admin.user,
        image_id=created.id,
        image_path=created.image_path,
    )
    log_with_fields(
        logger,
        logging.INFO,
        "gallery image created",
        admin_user_id=admin.user.id,
        image_id=created.id,
        size=len(data),
    )
    return redirect_to(GALLERY_PATH)


@router.post(f"{GALLERY_PATH}/{{image_id}}", response_class=RedirectResponse)
async def update_gallery_item(
    image_id: uuid.UUID,
    title: str = Form(""),
    alt_text: str = Form(""),
    is_visible: str | None = Form(None),
    selected_tags: list[str] = Form([]),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    normalized_title = clean_text(title)
    if not normalized_title:
        return redirect_to(GALLERY_PATH)

    image = await GalleryImageRepository(session).get(image_id)
    if image is None:
        return redirect_to(GALLERY_PATH)

    tag_ids = parse_uuid_list(selected_tags)
    await update_gallery_image(
        session,
        image=image,
        title=normalized_title,
        alt_text=optional_text(alt_text),
        is_visible=checkbox_checked(is_visible),
        tag_ids=tag_ids,
    )

    audit_admin_success(
        event=ADMIN_EVENT_GALLERY_IMAGE_UPDATE,
        actor=admin.user,
        image_id=image_id,
        tag_count=len(tag_ids),
    )
    return redirect_to(GALLERY_PATH)


@router.post(f"{GALLERY_PATH}/{{image_id}}/visibility", response_class=RedirectResponse)
async def toggle_gallery_visibility(
    image_id: uuid.UUID,
    is_visible: str = Form(""),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    repo = GalleryImageRepository(session)
    image = await repo.get(image_id)
    if image is None:
        return redirect_to(GALLERY_PATH)

    new_is_visible = not posted_true(is_visible)
    await repo.update(image, {"is_visible": new_is_visible})
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_GALLERY_IMAGE_VISIBILITY_TOGGLE,
        actor=admin.user,
        image_id=image_id,
        new_is_visible=new_is_visible,
    )
    return redirect_to(GALLERY_PATH)


@router.post(f"{GALLERY_PATH}/{{image_id}}/delete", response_class=RedirectResponse)
async def delete_gallery_item(
    image_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    image = await GalleryImageRepository(session).get(image_id)
    if image is None:
        return redirect_to(GALLERY_PATH)

    image_path = image.image_path
    settings = get_settings()
    await delete_gallery_image(
        session,
        storage=get_storage(settings),
        bucket=settings.gallery_bucket,
        image=image,
    )

    audit_admin_success(
        event=ADMIN_EVENT_GALLERY_IMAGE_DELETE,
        actor=admin.user,
        image_id=image_id,
        image_path=image_path,
    )
    return redirect_to(GALLERY_PATH)
