from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from washdesk.auth import AdminContext, require_admin
from washdesk.db import get_session
from washdesk.db.models import QueueItem, QueueStatus
from washdesk.db.repos import QueueRepository, ServiceRepository
from washdesk.logging_config import log_with_fields
from washdesk.security.audit import audit_admin_success
from washdesk.security.audit_constants import (
    ADMIN_EVENT_QUEUE_ITEM_CREATE,
    ADMIN_EVENT_QUEUE_ITEM_DELETE,
    ADMIN_EVENT_QUEUE_ITEM_STATUS_UPDATE,
)
from washdesk.web.routes.admin import render_admin_page
from washdesk.web.routes.common import clean_text, parse_choice, parse_uuid, redirect_to

router = APIRouter()
logger = logging.getLogger("washdesk.admin.queues")

QUEUES_PATH = "/admin/queues"

QUEUE_STATUS_LABELS: dict[QueueStatus, str] = {
    QueueStatus.waiting: "Waiting",
    QueueStatus.in_progress: "In progress",
    QueueStatus.done: "Done",
    QueueStatus.canceled: "Canceled",
}


@router.get(QUEUES_PATH, response_class=HTMLResponse)
async def queues_page(
    request: Request,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> Response:
    services = await ServiceRepository(session).list_active_by_name()
    queue_items = await QueueRepository(session).list_with_services()
    return render_admin_page(
        request,
        "admin/queues.html",
        admin=admin,
        active_nav="queues",
        context={
            "services": services,
            "queue_items": queue_items,
            "status_labels": QUEUE_STATUS_LABELS,
        },
    )


@router.post(QUEUES_PATH, response_class=RedirectResponse)
async def create_queue_item(
    service_id: str = Form(""),
    customer_name: str = Form(""),
    vehicle_plate: str = Form(""),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    parsed_service_id = parse_uuid(service_id)
    normalized_customer = clean_text(customer_name)
    normalized_plate = clean_text(vehicle_plate)
    if parsed_service_id is None or not normalized_customer or not normalized_plate:
        return redirect_to(QUEUES_PATH)

    repo = QueueRepository(session)
    item = await repo.add(
        QueueItem(
            service_id=parsed_service_id,
            customer_name=normalized_customer,
            vehicle_plate=normalized_plate,
        )
    )
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_QUEUE_ITEM_CREATE,
        actor=admin.user,
        queue_item_id=item.id,
        service_id=parsed_service_id,
    )
    log_with_fields(
        logger,
        logging.INFO,
        "queue item created",
        admin_user_id=admin.user.id,
        queue_item_id=item.id,
    )
    return redirect_to(QUEUES_PATH)


@router.post(f"{QUEUES_PATH}/{{item_id}}/status", response_class=RedirectResponse)
async def update_queue_status(
    item_id: uuid.UUID,
    status: str = Form(QueueStatus.waiting.value),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    new_status = parse_choice(status or QueueStatus.waiting, QueueStatus, field="status")

    repo = QueueRepository(session)
    item = await repo.get(item_id)
    if item is None:
        return redirect_to(QUEUES_PATH)

    previous_status = item.status
    await repo.update(item, {"status": new_status})
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_QUEUE_ITEM_STATUS_UPDATE,
        actor=admin.user,
        queue_item_id=item.id,
        previous_status=previous_status,
        new_status=new_status,
    )
    return redirect_to(QUEUES_PATH)


@router.post(f"{QUEUES_PATH}/{{item_id}}/delete", response_class=RedirectResponse)
async def delete_queue_item(
    item_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    repo = QueueRepository(session)
    item = await repo.get(item_id)
    if item is None:
        return redirect_to(QUEUES_PATH)

    await repo.delete(item)
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_QUEUE_ITEM_DELETE,
        actor=admin.user,
        queue_item_id=item_id,
    )
    return redirect_to(QUEUES_PATH)
