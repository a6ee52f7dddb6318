"""
Flash news, videos and site-wide alert banners.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey

from ..core.database import Base


class FlashInfo(Base):
    """Breaking news alert. Higher priority is shown first."""
    __tablename__ = "flash_infos"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    url = Column(String(500), nullable=True)  # "En savoir plus" link
    active = Column(Boolean, nullable=False, default=True)
    priority = Column(Integer, nullable=False, default=1)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class Video(Base):
    """YouTube short."""
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    video_id = Column(String(50), nullable=False)  # YouTube video id
    views = Column(Integer, default=0)
    published_at = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SiteAlert(Base):
    """Coloured banner displayed on top of every page."""
    __tablename__ = "site_alerts"

    id = Column(Integer, primary_key=True, index=True)
    message = Column(Text, nullable=False)
    url = Column(String(500), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    priority = Column(Integer, nullable=False, default=1)
    background_color = Column(String(20), nullable=False, default="#dc2626")
    text_color = Column(String(20), nullable=False, default="#ffffff")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class LiveEvent(Base):
    """Live broadcast announcement (stream or embed)."""
    __tablename__ = "live_events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    live_url = Column(String(500), nullable=True)
    active = Column(Boolean, nullable=False, default=False)
    scheduled_for = Column(DateTime, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
