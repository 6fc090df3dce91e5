"""
filedrop
- GET  /          : health check
- GET  /list      : names of stored files
- GET  /download  : fetch a file by the key returned from /upload
- POST /upload    : store a file (multipart or raw body), returns its key
"""

import logging
import random
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filedrop.api.routes.files import router as files_router
from filedrop.api.routes.health import router as health_router
from filedrop.core.config import Settings
from filedrop.core.logging import configure_logging
from filedrop.services.filestore import FileStore
from filedrop.services.registry import KeyFactory, KeyPathRegistry, new_key

logger = logging.getLogger(__name__)

async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        logger.info("404 Not Found: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )

def create_app(
    settings: Optional[Settings] = None,
    key_factory: KeyFactory = new_key,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    app = FastAPI(title="filedrop", version="0.1.0")

    store = FileStore(
        settings.UPLOAD_DIR,
        KeyPathRegistry(),
        key_factory=key_factory,
        naming=settings.NAMING,
        tamper_probability=settings.TAMPER_PROBABILITY,
        tamper_payload=settings.TAMPER_PAYLOAD.encode(),
        rng=rng,
    )
    store.ensure_dir()
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(health_router, tags=["health"])
    app.include_router(files_router, tags=["files"])

    logger.debug("Serving files from %s", store.base_dir)
    return app
