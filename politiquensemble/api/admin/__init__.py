"""
Admin API, mounted under /api/admin.
Each resource router is gated by its permission code.
"""

from fastapi import APIRouter

from . import cache, community, content, elections, learning, live_coverage, media, users

router = APIRouter()

router.include_router(content.articles_router, prefix="/articles")
router.include_router(content.news_updates_router, prefix="/news-updates")
router.include_router(content.categories_router, prefix="/categories")
router.include_router(media.flash_infos_router, prefix="/flash-infos")
router.include_router(media.videos_router, prefix="/videos")
router.include_router(media.site_alerts_router, prefix="/site-alerts")
router.include_router(media.live_events_router, prefix="/live-events")
router.include_router(live_coverage.router, prefix="/live-coverages")
router.include_router(elections.router, prefix="/elections")
router.include_router(learning.topics_router, prefix="/educational-topics")
router.include_router(learning.content_router, prefix="/educational-content")
router.include_router(learning.quizzes_router, prefix="/quizzes")
router.include_router(learning.glossary_router, prefix="/glossary")
router.include_router(community.newsletter_router, prefix="/newsletter")
router.include_router(community.applications_router, prefix="/applications")
router.include_router(community.messages_router, prefix="/contact-messages")
router.include_router(users.users_router, prefix="/users")
router.include_router(users.roles_router, prefix="/roles")
router.include_router(cache.router, prefix="/cache")
