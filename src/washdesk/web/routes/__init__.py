from __future__ import annotations

from fastapi import APIRouter

from washdesk.web.routes.admin import router as admin_router
from washdesk.web.routes.auth import router as auth_router
from washdesk.web.routes.catalog import router as catalog_router
from washdesk.web.routes.files import router as files_router
from washdesk.web.routes.gallery import router as gallery_router
from washdesk.web.routes.logs import router as logs_router
from washdesk.web.routes.queues import router as queues_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(admin_router)
router.include_router(catalog_router)
router.include_router(queues_router)
router.include_router(gallery_router)
router.include_router(logs_router)
router.include_router(files_router)
