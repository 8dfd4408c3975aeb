from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from washdesk.auth import AdminContext, require_admin
from washdesk.db import get_session
from washdesk.db.models import Service, ServiceCategory
from washdesk.db.repos import ServiceRepository
from washdesk.logging_config import log_with_fields
from washdesk.security.audit import audit_admin_success
from washdesk.security.audit_constants import (
    ADMIN_EVENT_SERVICE_CREATE,
    ADMIN_EVENT_SERVICE_DELETE,
    ADMIN_EVENT_SERVICE_TOGGLE,
)
from washdesk.web.routes.admin import render_admin_page
from washdesk.web.routes.common import (
    checkbox_checked,
    clean_text,
    optional_text,
    parse_choice,
    parse_decimal,
    parse_int,
    posted_true,
    redirect_to,
)

router = APIRouter()
logger = logging.getLogger("washdesk.admin.services")

SERVICES_PATH = "/admin/services"


@router.get(SERVICES_PATH, response_class=HTMLResponse)
async def services_page(
    request: Request,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> Response:
    services = await ServiceRepository(session).list_newest_first()
    return render_admin_page(
        request,
        "admin/services.html",
        admin=admin,
        active_nav="services",
        context={"services": services, "categories": list(ServiceCategory)},
    )


@router.post(SERVICES_PATH, response_class=RedirectResponse)
async def create_service(
    name: str = Form(""),
    category: str = Form(ServiceCategory.car.value),
    description: str = Form(""),
    price: str = Form(""),
    duration_minutes: str = Form(""),
    is_active: str | None = Form(None),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    normalized_name = clean_text(name)
    if not normalized_name:
        return redirect_to(SERVICES_PATH)

    repo = ServiceRepository(session)
    service = await repo.add(
        Service(
            name=normalized_name,
            category=parse_choice(category or ServiceCategory.car, ServiceCategory, field="category"),
            description=optional_text(description),
            price=parse_decimal(price, field="price"),
            duration_minutes=parse_int(duration_minutes, field="duration"),
            is_active=checkbox_checked(is_active),
        )
    )
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_SERVICE_CREATE,
        actor=admin.user,
        service_id=service.id,
    )
    log_with_fields(
        logger,
        logging.INFO,
        "service created",
        admin_user_id=admin.user.id,
        service_id=service.id,
        category=service.category,
    )
    return redirect_to(SERVICES_PATH)


@router.post(f"{SERVICES_PATH}/{{service_id}}/toggle", response_class=RedirectResponse)
async def toggle_service(
    service_id: uuid.UUID,
    is_active: str = Form(""),
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    repo = ServiceRepository(session)
    service = await repo.get(service_id)
    if service is None:
        return redirect_to(SERVICES_PATH)

    # The form posts the value it rendered; the stored flag becomes its negation.
    new_is_active = not posted_true(is_active)
    await repo.update(service, {"is_active": new_is_active})
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_SERVICE_TOGGLE,
        actor=admin.user,
        service_id=service.id,
        new_is_active=new_is_active,
    )
    return redirect_to(SERVICES_PATH)


@router.post(f"{SERVICES_PATH}/{{service_id}}/delete", response_class=RedirectResponse)
async def delete_service(
    service_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_admin),
) -> RedirectResponse:
    repo = ServiceRepository(session)
    service = await repo.get(service_id)
    if service is None:
        return redirect_to(SERVICES_PATH)

    await repo.delete(service)
    await repo.commit()

    audit_admin_success(
        event=ADMIN_EVENT_SERVICE_DELETE,
        actor=admin.user,
        service_id=service_id,
    )
    log_with_fields(
        logger,
        logging.INFO,
        "service deleted",
        admin_user_id=admin.user.id,
        service_id=service_id,
    )
    return redirect_to(SERVICES_PATH)
