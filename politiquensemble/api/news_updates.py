"""
News ticker endpoint.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.article_service import ArticleService

router = APIRouter(route_class=CachedRoute)


class NewsUpdateResponse(BaseModel):
    id: int
    title: str
    content: Optional[str]
    icon: Optional[str]
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=List[NewsUpdateResponse], dependencies=[Depends(cache_lookup)])
async def list_news_updates(article_service: ArticleService = Depends()):
    return await article_service.list_active_news_updates()
