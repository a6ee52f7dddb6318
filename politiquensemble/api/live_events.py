"""
Live broadcast endpoints.
The home page shows the active event; the event page loads one by id.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.media_service import MediaService

active_router = APIRouter(route_class=CachedRoute)
router = APIRouter(route_class=CachedRoute)


class LiveEventResponse(BaseModel):
    id: int
    title: str
    description: str
    image_url: Optional[str]
    live_url: Optional[str]
    active: bool
    scheduled_for: Optional[datetime]
    category_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@active_router.get("", response_model=LiveEventResponse, dependencies=[Depends(cache_lookup)])
async def get_active_live_event(media_service: MediaService = Depends()):
    event = await media_service.get_active_live_event()
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aucun direct en cours")
    return event


@router.get("/{event_id}", response_model=LiveEventResponse, dependencies=[Depends(cache_lookup)])
async def get_live_event(event_id: str, media_service: MediaService = Depends()):
    try:
        event_id = int(event_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Identifiant de direct invalide") from None
    event = await media_service.get_live_event(event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Direct introuvable")
    return event
