"""
Article Service
Categories, articles and news ticker items.
"""

import re
import unicodedata
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session
from fastapi import Depends

from ..core.database import get_db
from ..models.article import Article, Category, NewsUpdate

SORT_ORDERS = {
    "recent": Article.created_at.desc(),
    "popular": Article.view_count.desc(),
    "commented": Article.comment_count.desc(),
}


def slugify(text: str) -> str:
    """URL-safe slug; French accents are folded ("Élection" -> "election")."""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")


class ArticleService:
    """Service for article and category operations."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    # ============ Categories ============

    async def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    async def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    async def create_category(self, name: str, slug: Optional[str] = None, color: str = "#FF4D4D") -> Category:
        category = Category(name=name, slug=slug or slugify(name), color=color)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    async def update_category(self, category_id: int, **fields) -> Optional[Category]:
        category = await self.get_category(category_id)
        if not category:
            return None
        for key, value in fields.items():
            setattr(category, key, value)
        self.db.commit()
        self.db.refresh(category)
        return category

    async def delete_category(self, category_id: int) -> bool:
        """Delete a category; its articles become uncategorised."""
        category = await self.get_category(category_id)
        if not category:
            return False
        self.db.query(Article).filter(Article.category_id == category_id).update(
            {"category_id": None}, synchronize_session=False
        )
        self.db.delete(category)
        self.db.commit()
        return True

    # ============ Articles ============

    async def create(self, title: str, content: str, excerpt: str, slug: Optional[str] = None, **kwargs) -> Article:
        """Create an article. Without an explicit slug one is derived from the title."""
        article = Article(
            title=title,
            slug=slug or await self.unique_slug(title),
            content=content,
            excerpt=excerpt,
            **kwargs
        )
        self.db.add(article)
        self.db.commit()
        self.db.refresh(article)
        return article

    async def update(self, article_id: int, **fields) -> Optional[Article]:
        article = await self.get_by_id(article_id)
        if not article:
            return None
        for key, value in fields.items():
            setattr(article, key, value)
        self.db.commit()
        self.db.refresh(article)
        return article

    async def delete(self, article_id: int) -> bool:
        article = await self.get_by_id(article_id)
        if not article:
            return False
        self.db.delete(article)
        self.db.commit()
        return True

    async def get_by_id(self, article_id: int) -> Optional[Article]:
        return self.db.query(Article).filter(Article.id == article_id).first()

    async def get_by_slug(self, slug: str, include_drafts: bool = False) -> Optional[Article]:
        query = self.db.query(Article).filter(Article.slug == slug)
        if not include_drafts:
            query = query.filter(Article.published.is_(True))
        return query.first()

    async def list_articles(
        self,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        include_drafts: bool = False,
    ) -> List[Article]:
        """
        List articles, most recent first unless another sort is asked for.
        ``sort`` is one of recent, popular, commented; unknown values fall
        back to recent.
        """
        query = self.db.query(Article)
        if not include_drafts:
            query = query.filter(Article.published.is_(True))

        if category_id:
            query = query.filter(Article.category_id == category_id)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Article.title.ilike(pattern),
                Article.excerpt.ilike(pattern),
                Article.content.ilike(pattern),
            ))

        order = SORT_ORDERS.get(sort or "recent", SORT_ORDERS["recent"])
        return query.order_by(order, Article.id.desc()).all()

    async def list_featured(self, limit: int = 3) -> List[Article]:
        return self.db.query(Article).filter(
            Article.featured.is_(True),
            Article.published.is_(True),
        ).order_by(Article.created_at.desc(), Article.id.desc()).limit(limit).all()

    async def list_recent(self, limit: int = 9) -> List[Article]:
        return self.db.query(Article).filter(
            Article.published.is_(True)
        ).order_by(Article.created_at.desc(), Article.id.desc()).limit(limit).all()

    async def list_by_category(self, category_id: int, limit: int = 6) -> List[Article]:
        return self.db.query(Article).filter(
            Article.published.is_(True),
            Article.category_id == category_id,
        ).order_by(Article.created_at.desc(), Article.id.desc()).limit(limit).all()

    async def list_by_author(self, author_id: int) -> List[Article]:
        return self.db.query(Article).filter(
            Article.author_id == author_id
        ).order_by(Article.created_at.desc()).all()

    async def increment_views(self, article_id: int):
        """Increment article view count."""
        self.db.query(Article).filter(Article.id == article_id).update(
            {"view_count": Article.view_count + 1}, synchronize_session=False
        )
        self.db.commit()

    async def unique_slug(self, title: str) -> str:
        """Slug from the title, suffixed with -2, -3... when already taken."""
        base = slugify(title) or "article"
        slug, n = base, 1
        while self.db.query(Article.id).filter(Article.slug == slug).first():
            n += 1
            slug = f"{base}-{n}"
        return slug

    # ============ News ticker ============

    async def list_active_news_updates(self) -> List[NewsUpdate]:
        return self.db.query(NewsUpdate).filter(
            NewsUpdate.active.is_(True)
        ).order_by(NewsUpdate.created_at.desc()).all()

    async def create_news_update(self, title: str, **kwargs) -> NewsUpdate:
        update = NewsUpdate(title=title, **kwargs)
        self.db.add(update)
        self.db.commit()
        self.db.refresh(update)
        return update
