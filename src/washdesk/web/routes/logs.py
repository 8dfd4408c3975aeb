from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from washdesk.auth import AdminContext, require_superadmin
from washdesk.db import get_session
from washdesk.db.repos import AuditLogRepository
from washdesk.settings import get_settings
from washdesk.web.routes.admin import render_admin_page

router = APIRouter()


@router.get("/admin/logs", response_class=HTMLResponse)
async def logs_page(
    request: Request,
    session: AsyncSession = Depends(get_session),
    admin: AdminContext = Depends(require_superadmin),
) -> Response:
    limit = max(1, get_settings().audit_log_view_limit)
    logs = await AuditLogRepository(session).list_recent(limit=limit)
    return render_admin_page(
        request,
        "admin/logs.html",
        admin=admin,
        active_nav="logs",
        context={"logs": logs, "limit": limit},
    )
