"""
Politiquensemble API
Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from . import __version__
from .api import (
    admin,
    articles,
    auth,
    categories,
    community,
    elections,
    flash_infos,
    glossary,
    learning,
    live_coverages,
    live_events,
    news_updates,
    site_alerts,
    videos,
)
from .core.config import settings
from .core.database import init_db
from .core.exception_handlers import setup_exception_handlers
from .core.logging_config import get_logger, setup_logging
from .core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.AUTO_CREATE_TABLES:
        init_db()
    logger.info("Politiquensemble API %s started", __version__)
    yield
    logger.info("Politiquensemble API stopped")


app = FastAPI(
    title="Politiquensemble API",
    description="Backend API for the Politiquensemble political news and education site",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie="politiquensemble_session",
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(articles.router, prefix="/api/articles", tags=["Articles"])
app.include_router(news_updates.router, prefix="/api/news-updates", tags=["News"])
app.include_router(flash_infos.router, prefix="/api/flash-infos", tags=["Flash infos"])
app.include_router(videos.router, prefix="/api/videos", tags=["Videos"])
app.include_router(site_alerts.router, prefix="/api/site-alerts", tags=["Site alerts"])
app.include_router(live_coverages.router, prefix="/api/live-coverages", tags=["Live coverage"])
app.include_router(live_events.active_router, prefix="/api/live-event", tags=["Live events"])
app.include_router(live_events.router, prefix="/api/live-events", tags=["Live events"])
app.include_router(elections.router, prefix="/api/elections", tags=["Elections"])
app.include_router(learning.topics_router, prefix="/api/educational-topics", tags=["Learning"])
app.include_router(learning.content_router, prefix="/api/educational-content", tags=["Learning"])
app.include_router(learning.quizzes_router, prefix="/api/quizzes", tags=["Learning"])
app.include_router(glossary.router, prefix="/api/glossary", tags=["Glossary"])
app.include_router(community.newsletter_router, prefix="/api/newsletter", tags=["Community"])
app.include_router(community.team_router, prefix="/api/team", tags=["Community"])
app.include_router(community.contact_router, prefix="/api/contact", tags=["Community"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "politiquensemble-api"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Politiquensemble API",
        "version": __version__,
        "docs": "/docs"
    }
