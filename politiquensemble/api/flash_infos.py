"""
Flash news endpoints.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.media_service import MediaService

router = APIRouter(route_class=CachedRoute)


class FlashInfoResponse(BaseModel):
    id: int
    title: str
    content: str
    image_url: Optional[str]
    url: Optional[str]
    active: bool
    priority: int
    category_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=List[FlashInfoResponse], dependencies=[Depends(cache_lookup)])
async def list_flash_infos(media_service: MediaService = Depends()):
    """Active flash infos, highest priority first."""
    return await media_service.list_flash_infos(active_only=True)


@router.get("/{flash_id}", response_model=FlashInfoResponse, dependencies=[Depends(cache_lookup)])
async def get_flash_info(flash_id: int, media_service: MediaService = Depends()):
    flash = await media_service.get_flash_info(flash_id)
    if not flash or not flash.active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Flash info introuvable")
    return flash
