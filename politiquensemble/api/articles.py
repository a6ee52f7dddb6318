"""
Article API endpoints.
Public listing, search and reading of published articles.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.article_service import ArticleService
from .categories import CategoryResponse

router = APIRouter(route_class=CachedRoute)


class AuthorResponse(BaseModel):
    id: int
    display_name: str
    avatar_url: Optional[str] = None
    title: Optional[str] = None

    class Config:
        from_attributes = True


class ArticleResponse(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    excerpt: str
    image_url: Optional[str]
    sources: Optional[str]
    author_id: Optional[int]
    category_id: Optional[int]
    published: bool
    featured: bool
    view_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorResponse] = None
    category: Optional[CategoryResponse] = None

    class Config:
        from_attributes = True


@router.get("", response_model=List[ArticleResponse], dependencies=[Depends(cache_lookup)])
async def list_articles(
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    sort: Optional[str] = Query(None, pattern="^(recent|popular|commented)$"),
    article_service: ArticleService = Depends()
):
    """
    List published articles.
    Filter by category and/or a text search on title, excerpt and content.
    """
    return await article_service.list_articles(category_id=category_id, search=search, sort=sort)


@router.get("/featured", response_model=List[ArticleResponse], dependencies=[Depends(cache_lookup)])
async def featured_articles(article_service: ArticleService = Depends()):
    return await article_service.list_featured()


@router.get("/recent", response_model=List[ArticleResponse], dependencies=[Depends(cache_lookup)])
async def recent_articles(article_service: ArticleService = Depends()):
    return await article_service.list_recent()


@router.get("/by-category/{category_id}", response_model=List[ArticleResponse], dependencies=[Depends(cache_lookup)])
async def articles_by_category(category_id: int, article_service: ArticleService = Depends()):
    return await article_service.list_by_category(category_id)


@router.get("/{slug}", response_model=ArticleResponse)
async def get_article(slug: str, article_service: ArticleService = Depends()):
    """Get a single published article by slug and count the view."""
    article = await article_service.get_by_slug(slug)
    if not article:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article introuvable")

    await article_service.increment_views(article.id)
    article.view_count += 1
    return article
