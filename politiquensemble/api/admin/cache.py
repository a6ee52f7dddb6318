"""
Response cache inspection for administrators.
"""

from fastapi import APIRouter, Depends

from ...core.cache import response_cache
from ...core.logging_config import get_logger
from ...permissions import ADMIN_PERMISSION
from ..deps import require_permission

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_permission(ADMIN_PERMISSION))])


@router.get("/stats")
async def cache_stats():
    return response_cache.stats()


@router.delete("")
async def flush_cache(prefix: str = ""):
    """Drop every entry, or only those under ``prefix``."""
    if prefix:
        dropped = response_cache.invalidate_prefix(prefix)
    else:
        dropped = len(response_cache)
        response_cache.clear()
    logger.info("Cache flushed: %d entries dropped", dropped)
    return {"dropped": dropped}
