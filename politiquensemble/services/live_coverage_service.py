"""
Live Coverage Service
Coverages, their editorial team, the update feed and visitor questions.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.logging_config import get_logger
from ..models.live_coverage import (
    LiveCoverage,
    LiveCoverageEditor,
    LiveCoverageQuestion,
    LiveCoverageUpdate,
    QuestionStatus,
)
from .article_service import slugify

logger = get_logger(__name__)


class LiveCoverageService:
    """Service for live coverage operations."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    # ============ Coverages ============

    async def list_coverages(self, active_only: bool = False) -> List[LiveCoverage]:
        query = self.db.query(LiveCoverage)
        if active_only:
            query = query.filter(LiveCoverage.active.is_(True))
        return query.order_by(LiveCoverage.created_at.desc(), LiveCoverage.id.desc()).all()

    async def get_coverage(self, coverage_id: int) -> Optional[LiveCoverage]:
        return self.db.query(LiveCoverage).filter(LiveCoverage.id == coverage_id).first()

    async def get_coverage_by_slug(self, slug: str) -> Optional[LiveCoverage]:
        return self.db.query(LiveCoverage).filter(LiveCoverage.slug == slug).first()

    async def create_coverage(self, title: str, subject: str, slug: Optional[str] = None, **kwargs) -> LiveCoverage:
        coverage = LiveCoverage(title=title, subject=subject, slug=slug or slugify(title), **kwargs)
        self.db.add(coverage)
        self.db.commit()
        self.db.refresh(coverage)
        logger.info("Live coverage %s created", coverage.slug)
        return coverage

    async def update_coverage(self, coverage_id: int, **fields) -> Optional[LiveCoverage]:
        coverage = await self.get_coverage(coverage_id)
        if not coverage:
            return None
        for key, value in fields.items():
            setattr(coverage, key, value)
        coverage.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(coverage)
        return coverage

    async def delete_coverage(self, coverage_id: int) -> bool:
        """Delete a coverage with its editors, updates and questions."""
        coverage = await self.get_coverage(coverage_id)
        if not coverage:
            return False
        self.db.delete(coverage)
        self.db.commit()
        return True

    # ============ Editors ============

    async def list_editors(self, coverage_id: int) -> List[LiveCoverageEditor]:
        return self.db.query(LiveCoverageEditor).filter(
            LiveCoverageEditor.coverage_id == coverage_id
        ).order_by(LiveCoverageEditor.id).all()

    async def add_editor(self, coverage_id: int, editor_id: int, role: Optional[str] = None) -> LiveCoverageEditor:
        """Assign an editor; assigning twice updates the coverage-specific role."""
        editor = self.db.query(LiveCoverageEditor).filter(
            LiveCoverageEditor.coverage_id == coverage_id,
            LiveCoverageEditor.editor_id == editor_id,
        ).first()
        if editor:
            editor.role = role
        else:
            editor = LiveCoverageEditor(coverage_id=coverage_id, editor_id=editor_id, role=role)
            self.db.add(editor)
        self.db.commit()
        self.db.refresh(editor)
        return editor

    async def remove_editor(self, coverage_id: int, editor_id: int) -> bool:
        deleted = self.db.query(LiveCoverageEditor).filter(
            LiveCoverageEditor.coverage_id == coverage_id,
            LiveCoverageEditor.editor_id == editor_id,
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    # ============ Updates ============

    async def list_updates(self, coverage_id: int) -> List[LiveCoverageUpdate]:
        """Feed order: newest first."""
        return self.db.query(LiveCoverageUpdate).filter(
            LiveCoverageUpdate.coverage_id == coverage_id
        ).order_by(LiveCoverageUpdate.timestamp.desc(), LiveCoverageUpdate.id.desc()).all()

    async def create_update(self, coverage_id: int, content: str, **kwargs) -> LiveCoverageUpdate:
        if kwargs.get("timestamp") is None:
            kwargs["timestamp"] = datetime.utcnow()
        update = LiveCoverageUpdate(coverage_id=coverage_id, content=content, **kwargs)
        self.db.add(update)
        self.db.commit()
        self.db.refresh(update)
        return update

    async def delete_update(self, coverage_id: int, update_id: int) -> bool:
        deleted = self.db.query(LiveCoverageUpdate).filter(
            LiveCoverageUpdate.id == update_id,
            LiveCoverageUpdate.coverage_id == coverage_id,
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    # ============ Questions ============

    async def list_questions(self, coverage_id: int, status: Optional[str] = None) -> List[LiveCoverageQuestion]:
        query = self.db.query(LiveCoverageQuestion).filter(LiveCoverageQuestion.coverage_id == coverage_id)
        if status:
            query = query.filter(LiveCoverageQuestion.status == status)
        return query.order_by(LiveCoverageQuestion.timestamp.desc(), LiveCoverageQuestion.id.desc()).all()

    async def get_question(self, coverage_id: int, question_id: int) -> Optional[LiveCoverageQuestion]:
        return self.db.query(LiveCoverageQuestion).filter(
            LiveCoverageQuestion.id == question_id,
            LiveCoverageQuestion.coverage_id == coverage_id,
        ).first()

    async def submit_question(self, coverage_id: int, username: str, content: str) -> LiveCoverageQuestion:
        """Visitor questions always start as pending."""
        question = LiveCoverageQuestion(
            coverage_id=coverage_id,
            username=username,
            content=content,
            status=QuestionStatus.PENDING.value,
            timestamp=datetime.utcnow(),
        )
        self.db.add(question)
        self.db.commit()
        self.db.refresh(question)
        return question

    async def set_question_status(self, coverage_id: int, question_id: int, status: str) -> Optional[LiveCoverageQuestion]:
        question = await self.get_question(coverage_id, question_id)
        if not question:
            return None
        question.status = status
        self.db.commit()
        self.db.refresh(question)
        return question

    async def answer_question(
        self,
        coverage_id: int,
        question_id: int,
        content: str,
        author_id: int,
        important: bool = False
    ) -> Optional[LiveCoverageUpdate]:
        """
        Publish an answer as a feed update and mark the question approved
        and answered.
        """
        question = await self.get_question(coverage_id, question_id)
        if not question:
            return None

        update = LiveCoverageUpdate(
            coverage_id=coverage_id,
            content=content,
            author_id=author_id,
            timestamp=datetime.utcnow(),
            important=important,
            is_answer=True,
            question_id=question_id,
        )
        self.db.add(update)
        question.status = QuestionStatus.APPROVED.value
        question.answered = True
        self.db.commit()
        self.db.refresh(update)
        return update
