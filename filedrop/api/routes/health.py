import logging

from fastapi import APIRouter

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/")
def health():
    logger.info("GET /")
    return {"status": "ok"}
