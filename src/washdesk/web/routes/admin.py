from __future__ import annotations

import logging
from collections.abc import Mapping

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from starlette.responses import Response

from washdesk.auth import AdminContext, require_admin
from washdesk.logging_config import log_with_fields
from washdesk.web.routes.common import templates

router = APIRouter()
logger = logging.getLogger("washdesk.admin")


def render_admin_page(
    request: Request,
    template_name: str,
    *,
    admin: AdminContext,
    active_nav: str,
    context: Mapping[str, object] | None = None,
    status_code: int = 200,
) -> Response:
    page_context: dict[str, object] = {
        "current_user": admin.user,
        "role": admin.role,
        "is_superadmin": admin.is_superadmin,
        "active_nav": active_nav,
    }
    if context:
        page_context.update(context)
    return templates.TemplateResponse(
        request,
        template_name,
        page_context,
        status_code=status_code,
    )


@router.get("/admin", response_class=HTMLResponse)
async def admin_home(
    request: Request,
    admin: AdminContext = Depends(require_admin),
) -> Response:
    log_with_fields(
        logger,
        logging.DEBUG,
        "admin home viewed",
        admin_user_id=admin.user.id,
        role=admin.role,
    )
    return render_admin_page(request, "admin/home.html", admin=admin, active_nav="home")
