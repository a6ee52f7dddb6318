"""
Admin endpoints for flash infos, videos, site alerts and live events.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from pydantic import BaseModel, Field

from ...core.cache import response_cache
from ...models.user import User
from ...services.media_service import MediaService
from ..deps import admin_router, get_current_user
from ..flash_infos import FlashInfoResponse
from ..live_events import LiveEventResponse
from ..site_alerts import SiteAlertResponse
from ..videos import VideoResponse

flash_infos_router = admin_router("flash_infos")
videos_router = admin_router("videos")
site_alerts_router = admin_router("site_alerts")
live_events_router = admin_router("live_coverage")


class FlashInfoRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    content: str
    image_url: Optional[str] = None
    url: Optional[str] = None
    active: bool = True
    priority: int = 1
    category_id: Optional[int] = None


class UpdateFlashInfoRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    url: Optional[str] = None
    active: Optional[bool] = None
    priority: Optional[int] = None
    category_id: Optional[int] = None


class VideoRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    video_id: str = Field(..., min_length=1, max_length=50)
    published_at: Optional[datetime] = None


class UpdateVideoRequest(BaseModel):
    title: Optional[str] = None
    video_id: Optional[str] = None
    published_at: Optional[datetime] = None


class SiteAlertRequest(BaseModel):
    message: str = Field(..., min_length=1)
    url: Optional[str] = None
    active: bool = True
    priority: int = 1
    background_color: str = "#dc2626"
    text_color: str = "#ffffff"


class UpdateSiteAlertRequest(BaseModel):
    message: Optional[str] = None
    url: Optional[str] = None
    active: Optional[bool] = None
    priority: Optional[int] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None


class LiveEventRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str
    image_url: Optional[str] = None
    live_url: Optional[str] = None
    active: bool = False
    scheduled_for: Optional[datetime] = None
    category_id: Optional[int] = None


class UpdateLiveEventRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    live_url: Optional[str] = None
    active: Optional[bool] = None
    scheduled_for: Optional[datetime] = None
    category_id: Optional[int] = None


def _not_found(label: str):
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} introuvable")


# ============ Flash infos ============

@flash_infos_router.get("", response_model=List[FlashInfoResponse])
async def list_flash_infos(media_service: MediaService = Depends()):
    return await media_service.list_flash_infos(active_only=False)


@flash_infos_router.post("", response_model=FlashInfoResponse, status_code=status.HTTP_201_CREATED)
async def create_flash_info(body: FlashInfoRequest, media_service: MediaService = Depends()):
    flash = await media_service.create_flash_info(**body.model_dump())
    response_cache.invalidate_prefix("/api/flash-infos", "/api/admin/flash-infos")
    return flash


@flash_infos_router.put("/{flash_id}", response_model=FlashInfoResponse)
async def update_flash_info(flash_id: int, body: UpdateFlashInfoRequest, media_service: MediaService = Depends()):
    flash = await media_service.update_flash_info(flash_id, **body.model_dump(exclude_unset=True))
    if not flash:
        raise _not_found("Flash info")
    response_cache.invalidate_prefix("/api/flash-infos", "/api/admin/flash-infos")
    return flash


@flash_infos_router.delete("/{flash_id}")
async def delete_flash_info(flash_id: int, media_service: MediaService = Depends()):
    if not await media_service.delete_flash_info(flash_id):
        raise _not_found("Flash info")
    response_cache.invalidate_prefix("/api/flash-infos", "/api/admin/flash-infos")
    return {"message": "Flash info supprimé"}


# ============ Videos ============

@videos_router.get("", response_model=List[VideoResponse])
async def list_videos(media_service: MediaService = Depends()):
    return await media_service.list_videos()


@videos_router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(body: VideoRequest, media_service: MediaService = Depends()):
    fields = body.model_dump()
    if fields["published_at"] is None:
        del fields["published_at"]
    video = await media_service.create_video(**fields)
    response_cache.invalidate_prefix("/api/videos", "/api/admin/videos")
    return video


@videos_router.put("/{video_id}", response_model=VideoResponse)
async def update_video(video_id: int, body: UpdateVideoRequest, media_service: MediaService = Depends()):
    video = await media_service.update_video(video_id, **body.model_dump(exclude_unset=True))
    if not video:
        raise _not_found("Vidéo")
    response_cache.invalidate_prefix("/api/videos", "/api/admin/videos")
    return video


@videos_router.delete("/{video_id}")
async def delete_video(video_id: int, media_service: MediaService = Depends()):
    if not await media_service.delete_video(video_id):
        raise _not_found("Vidéo")
    response_cache.invalidate_prefix("/api/videos", "/api/admin/videos")
    return {"message": "Vidéo supprimée"}


# ============ Site alerts ============

@site_alerts_router.get("", response_model=List[SiteAlertResponse])
async def list_site_alerts(media_service: MediaService = Depends()):
    return await media_service.list_site_alerts()


@site_alerts_router.post("", response_model=SiteAlertResponse, status_code=status.HTTP_201_CREATED)
async def create_site_alert(
    body: SiteAlertRequest,
    user: User = Depends(get_current_user),
    media_service: MediaService = Depends()
):
    alert = await media_service.create_site_alert(created_by=user.id, **body.model_dump())
    response_cache.invalidate_prefix("/api/site-alerts", "/api/admin/site-alerts")
    return alert


@site_alerts_router.put("/{alert_id}", response_model=SiteAlertResponse)
async def update_site_alert(alert_id: int, body: UpdateSiteAlertRequest, media_service: MediaService = Depends()):
    alert = await media_service.update_site_alert(alert_id, **body.model_dump(exclude_unset=True))
    if not alert:
        raise _not_found("Alerte")
    response_cache.invalidate_prefix("/api/site-alerts", "/api/admin/site-alerts")
    return alert


@site_alerts_router.delete("/{alert_id}")
async def delete_site_alert(alert_id: int, media_service: MediaService = Depends()):
    if not await media_service.delete_site_alert(alert_id):
        raise _not_found("Alerte")
    response_cache.invalidate_prefix("/api/site-alerts", "/api/admin/site-alerts")
    return {"message": "Alerte supprimée"}


# ============ Live events ============

def _invalidate_live_events():
    # "/api/live-event" also covers "/api/live-events/..."
    response_cache.invalidate_prefix("/api/live-event", "/api/admin/live-events")


@live_events_router.get("", response_model=List[LiveEventResponse])
async def list_live_events(media_service: MediaService = Depends()):
    return await media_service.list_live_events()


@live_events_router.post("", response_model=LiveEventResponse, status_code=status.HTTP_201_CREATED)
async def create_live_event(body: LiveEventRequest, media_service: MediaService = Depends()):
    event = await media_service.create_live_event(**body.model_dump())
    _invalidate_live_events()
    return event


@live_events_router.put("/{event_id}", response_model=LiveEventResponse)
async def update_live_event(event_id: int, body: UpdateLiveEventRequest, media_service: MediaService = Depends()):
    event = await media_service.update_live_event(event_id, **body.model_dump(exclude_unset=True))
    if not event:
        raise _not_found("Direct")
    _invalidate_live_events()
    return event


@live_events_router.delete("/{event_id}")
async def delete_live_event(event_id: int, media_service: MediaService = Depends()):
    if not await media_service.delete_live_event(event_id):
        raise _not_found("Direct")
    _invalidate_live_events()
    return {"message": "Direct supprimé"}
