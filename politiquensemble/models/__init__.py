"""Database models for Politiquensemble."""
from .user import User, UserRole, CustomRole, AdminPermission, RolePermission
from .article import Article, Category, NewsUpdate
from .media import FlashInfo, Video, SiteAlert, LiveEvent
from .live_coverage import (
    LiveCoverage,
    LiveCoverageEditor,
    LiveCoverageQuestion,
    LiveCoverageUpdate,
    QuestionStatus,
)
from .election import Election, ElectionReaction
from .learning import EducationalTopic, EducationalContent, EducationalQuiz, PoliticalGlossaryTerm
from .community import NewsletterSubscriber, TeamApplication, ContactMessage, ApplicationStatus
