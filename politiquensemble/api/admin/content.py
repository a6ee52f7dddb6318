"""
Admin endpoints for articles, the news ticker and categories.
"""

from typing import List, Optional

from fastapi import Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ...core.cache import response_cache
from ...models.user import User
from ...services.article_service import ArticleService
from ..articles import ArticleResponse
from ..categories import CategoryResponse
from ..deps import admin_router, get_current_user
from ..news_updates import NewsUpdateResponse

articles_router = admin_router("articles")
news_updates_router = admin_router("articles")
categories_router = admin_router("categories")


class ArticleRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: Optional[str] = None
    content: str
    excerpt: str
    image_url: Optional[str] = None
    sources: Optional[str] = None
    category_id: Optional[int] = None
    published: bool = True
    featured: bool = False


class UpdateArticleRequest(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    sources: Optional[str] = None
    category_id: Optional[int] = None
    published: Optional[bool] = None
    featured: Optional[bool] = None


class NewsUpdateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    content: Optional[str] = None
    icon: Optional[str] = None
    active: bool = True


class CategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = None
    color: str = "#FF4D4D"


class UpdateCategoryRequest(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    color: Optional[str] = None


def _invalidate_articles():
    response_cache.invalidate_prefix("/api/articles", "/api/admin/articles")


# ============ Articles ============

@articles_router.get("", response_model=List[ArticleResponse])
async def list_articles(
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    sort: Optional[str] = Query(None, pattern="^(recent|popular|commented)$"),
    article_service: ArticleService = Depends()
):
    """Every article, drafts included."""
    return await article_service.list_articles(
        category_id=category_id, search=search, sort=sort, include_drafts=True
    )


@articles_router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: int, article_service: ArticleService = Depends()):
    article = await article_service.get_by_id(article_id)
    if not article:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article introuvable")
    return article


@articles_router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    body: ArticleRequest,
    user: User = Depends(get_current_user),
    article_service: ArticleService = Depends()
):
    """Create an article signed by the current user."""
    if body.slug and await article_service.get_by_slug(body.slug, include_drafts=True):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ce slug est déjà utilisé")
    article = await article_service.create(author_id=user.id, **body.model_dump())
    _invalidate_articles()
    return article


@articles_router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(article_id: int, body: UpdateArticleRequest, article_service: ArticleService = Depends()):
    article = await article_service.update(article_id, **body.model_dump(exclude_unset=True))
    if not article:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article introuvable")
    _invalidate_articles()
    return article


@articles_router.delete("/{article_id}")
async def delete_article(article_id: int, article_service: ArticleService = Depends()):
    if not await article_service.delete(article_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article introuvable")
    _invalidate_articles()
    return {"message": "Article supprimé"}


# ============ News ticker ============

@news_updates_router.post("", response_model=NewsUpdateResponse, status_code=status.HTTP_201_CREATED)
async def create_news_update(body: NewsUpdateRequest, article_service: ArticleService = Depends()):
    update = await article_service.create_news_update(**body.model_dump())
    response_cache.invalidate_prefix("/api/news-updates")
    return update


# ============ Categories ============

@categories_router.get("", response_model=List[CategoryResponse])
async def list_categories(article_service: ArticleService = Depends()):
    return await article_service.list_categories()


@categories_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(body: CategoryRequest, article_service: ArticleService = Depends()):
    category = await article_service.create_category(**body.model_dump())
    response_cache.invalidate_prefix("/api/categories", "/api/admin/categories")
    return category


@categories_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: int, body: UpdateCategoryRequest, article_service: ArticleService = Depends()):
    category = await article_service.update_category(category_id, **body.model_dump(exclude_unset=True))
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catégorie introuvable")
    response_cache.invalidate_prefix("/api/categories", "/api/admin/categories")
    _invalidate_articles()
    return category


@categories_router.delete("/{category_id}")
async def delete_category(category_id: int, article_service: ArticleService = Depends()):
    """Delete a category. Its articles are kept, uncategorised."""
    if not await article_service.delete_category(category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catégorie introuvable")
    response_cache.invalidate_prefix("/api/categories", "/api/admin/categories")
    _invalidate_articles()
    return {"message": "Catégorie supprimée"}
