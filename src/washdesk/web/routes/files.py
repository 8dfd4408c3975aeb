from __future__ import annotations

from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool
from starlette.responses import FileResponse

from washdesk.errors import StorageError
from washdesk.storage import get_storage

router = APIRouter()


@router.get("/storage/{bucket}/{key:path}", response_class=FileResponse)
async def storage_object(bucket: str, key: str) -> FileResponse:
    try:
        path, content_type = await run_in_threadpool(get_storage().locate, bucket, key)
    except StorageError:
        raise HTTPException(status_code=404, detail="Not found") from None
    # Without a stored type, FileResponse guesses from the file name.
    return FileResponse(path, media_type=content_type)
