"""
Video endpoints (YouTube shorts).
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.media_service import MediaService

router = APIRouter(route_class=CachedRoute)


class VideoResponse(BaseModel):
    id: int
    title: str
    video_id: str
    views: int
    published_at: Optional[datetime]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


@router.get("", response_model=List[VideoResponse], dependencies=[Depends(cache_lookup)])
async def list_videos(limit: Optional[int] = Query(None, ge=1, le=100), media_service: MediaService = Depends()):
    return await media_service.list_videos(limit=limit)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: int, media_service: MediaService = Depends()):
    """Get a video and count the view."""
    video = await media_service.get_video(video_id)
    if not video:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vidéo introuvable")
    await media_service.increment_video_views(video_id)
    video.views = (video.views or 0) + 1
    return video
