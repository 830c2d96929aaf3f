from fastapi import APIRouter

from mediafetch.config.settings import config
from mediafetch.core.state import state

router = APIRouter()


@router.get("/health")
async def health_check():
    """Lightweight health check"""
    return {"status": "ok"}


@router.get("/health/full")
async def health_check_full():
    """Detailed health check"""
    return {
        "status": "ok",
        "version": config.api.version,
        "ytdlp_binary": config.ytdlp.binary,
        "ytdlp_version": state.ytdlp_version,
    }
