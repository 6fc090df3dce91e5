import logging
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.responses import FileResponse, JSONResponse

from filedrop.services.filestore import (
    FileStore,
    KeyNotFoundError,
    MissingOnDiskError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def get_store(request: Request) -> FileStore:
    return request.app.state.store

def content_disposition(name: str) -> str:
    try:
        name.encode("latin-1")
    except UnicodeEncodeError:
        return f"attachment; filename*=utf-8''{quote(name)}"
    return f"attachment; filename={name}"

async def _read_upload(request: Request, filename: Optional[str]):
    """Return (bytes, filename) from a multipart form or the raw body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        try:
            for _, value in form.multi_items():
                if isinstance(value, UploadFile):
                    return await value.read(), value.filename or filename
        finally:
            await form.close()
        raise HTTPException(status_code=400, detail="No file field in multipart body")
    if not filename:
        raise HTTPException(status_code=400, detail="Raw uploads need a filename query parameter")
    return await request.body(), filename

@router.get("/list", response_model=List[str])
async def list_upload(store: FileStore = Depends(get_store)):
    logger.info("GET /list")
    return await run_in_threadpool(store.list_files)

@router.get("/download")
async def download(
    key: Optional[str] = Query(None),
    store: FileStore = Depends(get_store),
):
    logger.info("GET /download")
    if not key:
        raise HTTPException(status_code=400, detail="Missing key")
    try:
        path = await run_in_threadpool(store.resolve, key)
    except KeyNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    except MissingOnDiskError:
        raise HTTPException(status_code=500, detail="File registered but missing on disk")
    headers = {"Content-Disposition": content_disposition(path.name)}
    return FileResponse(path, media_type="application/octet-stream", headers=headers)

@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload(
    request: Request,
    filename: Optional[str] = Query(None),
    store: FileStore = Depends(get_store),
):
    logger.info("POST /upload")
    data, name = await _read_upload(request, filename)
    try:
        stored = await run_in_threadpool(store.save, data, name)
    except StorageWriteError as e:
        logger.error("Upload failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to store file")
    logger.info("upload_path: %s", stored.key)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content={"upload_path": stored.key})
