"""
Media Service
Flash news, videos, site alert banners and live events.
"""

from typing import List, Optional, Type, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..models.media import FlashInfo, LiveEvent, SiteAlert, Video

T = TypeVar("T")


class MediaService:
    """Service for flash infos, videos, site alerts and live events."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    # ============ Flash infos ============

    async def list_flash_infos(self, active_only: bool = True) -> List[FlashInfo]:
        """Highest priority first, then most recent."""
        query = self.db.query(FlashInfo)
        if active_only:
            query = query.filter(FlashInfo.active.is_(True))
        return query.order_by(FlashInfo.priority.desc(), FlashInfo.created_at.desc()).all()

    async def get_flash_info(self, flash_id: int) -> Optional[FlashInfo]:
        return self._get(FlashInfo, flash_id)

    async def create_flash_info(self, **fields) -> FlashInfo:
        return self._create(FlashInfo, fields)

    async def update_flash_info(self, flash_id: int, **fields) -> Optional[FlashInfo]:
        return self._update(FlashInfo, flash_id, fields)

    async def delete_flash_info(self, flash_id: int) -> bool:
        return self._delete(FlashInfo, flash_id)

    # ============ Videos ============

    async def list_videos(self, limit: Optional[int] = None) -> List[Video]:
        query = self.db.query(Video).order_by(Video.published_at.desc(), Video.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    async def get_video(self, video_id: int) -> Optional[Video]:
        return self._get(Video, video_id)

    async def create_video(self, **fields) -> Video:
        return self._create(Video, fields)

    async def update_video(self, video_id: int, **fields) -> Optional[Video]:
        return self._update(Video, video_id, fields)

    async def delete_video(self, video_id: int) -> bool:
        return self._delete(Video, video_id)

    async def increment_video_views(self, video_id: int):
        self.db.query(Video).filter(Video.id == video_id).update(
            {"views": Video.views + 1}, synchronize_session=False
        )
        self.db.commit()

    # ============ Site alerts ============

    async def list_site_alerts(self, active_only: bool = False) -> List[SiteAlert]:
        query = self.db.query(SiteAlert)
        if active_only:
            query = query.filter(SiteAlert.active.is_(True))
        return query.order_by(SiteAlert.priority.desc(), SiteAlert.created_at.desc()).all()

    async def get_site_alert(self, alert_id: int) -> Optional[SiteAlert]:
        return self._get(SiteAlert, alert_id)

    async def create_site_alert(self, **fields) -> SiteAlert:
        return self._create(SiteAlert, fields)

    async def update_site_alert(self, alert_id: int, **fields) -> Optional[SiteAlert]:
        return self._update(SiteAlert, alert_id, fields)

    async def delete_site_alert(self, alert_id: int) -> bool:
        return self._delete(SiteAlert, alert_id)

    # ============ Live events ============

    async def list_live_events(self) -> List[LiveEvent]:
        return self.db.query(LiveEvent).order_by(LiveEvent.created_at.desc(), LiveEvent.id.desc()).all()

    async def get_active_live_event(self) -> Optional[LiveEvent]:
        """The most recently updated active event, if any."""
        return self.db.query(LiveEvent).filter(LiveEvent.active.is_(True)).order_by(
            LiveEvent.updated_at.desc(), LiveEvent.id.desc()
        ).first()

    async def get_live_event(self, event_id: int) -> Optional[LiveEvent]:
        return self._get(LiveEvent, event_id)

    async def create_live_event(self, **fields) -> LiveEvent:
        return self._create(LiveEvent, fields)

    async def update_live_event(self, event_id: int, **fields) -> Optional[LiveEvent]:
        return self._update(LiveEvent, event_id, fields)

    async def delete_live_event(self, event_id: int) -> bool:
        return self._delete(LiveEvent, event_id)

    # ============ Helpers ============

    def _get(self, model: Type[T], obj_id: int) -> Optional[T]:
        return self.db.query(model).filter(model.id == obj_id).first()

    def _create(self, model: Type[T], fields: dict) -> T:
        obj = model(**fields)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def _update(self, model: Type[T], obj_id: int, fields: dict) -> Optional[T]:
        obj = self._get(model, obj_id)
        if obj is None:
            return None
        for key, value in fields.items():
            setattr(obj, key, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def _delete(self, model: Type[T], obj_id: int) -> bool:
        obj = self._get(model, obj_id)
        if obj is None:
            return False
        self.db.delete(obj)
        self.db.commit()
        return True
