"""
Category API endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.article_service import ArticleService

router = APIRouter(route_class=CachedRoute)


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    color: str

    class Config:
        from_attributes = True


@router.get("", response_model=List[CategoryResponse], dependencies=[Depends(cache_lookup)])
async def list_categories(article_service: ArticleService = Depends()):
    return await article_service.list_categories()


@router.get("/{slug}", response_model=CategoryResponse, dependencies=[Depends(cache_lookup)])
async def get_category(slug: str, article_service: ArticleService = Depends()):
    category = await article_service.get_category_by_slug(slug)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catégorie introuvable")
    return category
