"""
Site alert banners.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.media_service import MediaService

router = APIRouter(route_class=CachedRoute)


class SiteAlertResponse(BaseModel):
    id: int
    message: str
    url: Optional[str]
    active: bool
    priority: int
    background_color: str
    text_color: str
    created_at: datetime
    created_by: Optional[int]

    class Config:
        from_attributes = True


@router.get("/active", response_model=List[SiteAlertResponse], dependencies=[Depends(cache_lookup)])
async def active_site_alerts(media_service: MediaService = Depends()):
    return await media_service.list_site_alerts(active_only=True)
