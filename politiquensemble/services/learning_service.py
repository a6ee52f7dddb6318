"""
Learning Service
Educational topics, lessons, quizzes and the political glossary.
"""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..models.learning import (
    EducationalContent,
    EducationalQuiz,
    EducationalTopic,
    PoliticalGlossaryTerm,
)
from .article_service import slugify


class LearningService:
    """Service for the educational section."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    # ============ Topics ============

    async def list_topics(self) -> List[EducationalTopic]:
        return self.db.query(EducationalTopic).order_by(EducationalTopic.order, EducationalTopic.id).all()

    async def get_topic(self, topic_id: int) -> Optional[EducationalTopic]:
        return self.db.query(EducationalTopic).filter(EducationalTopic.id == topic_id).first()

    async def get_topic_by_slug(self, slug: str) -> Optional[EducationalTopic]:
        return self.db.query(EducationalTopic).filter(EducationalTopic.slug == slug).first()

    async def create_topic(self, title: str, slug: Optional[str] = None, **kwargs) -> EducationalTopic:
        topic = EducationalTopic(title=title, slug=slug or slugify(title), **kwargs)
        self.db.add(topic)
        self.db.commit()
        self.db.refresh(topic)
        return topic

    async def update_topic(self, topic_id: int, **fields) -> Optional[EducationalTopic]:
        topic = await self.get_topic(topic_id)
        if not topic:
            return None
        for key, value in fields.items():
            setattr(topic, key, value)
        self.db.commit()
        self.db.refresh(topic)
        return topic

    async def delete_topic(self, topic_id: int) -> bool:
        """Delete a topic together with its lessons and their quizzes."""
        topic = await self.get_topic(topic_id)
        if not topic:
            return False
        self.db.delete(topic)
        self.db.commit()
        return True

    # ============ Lessons ============

    async def list_contents(self, topic_id: Optional[int] = None, include_drafts: bool = False) -> List[EducationalContent]:
        query = self.db.query(EducationalContent)
        if topic_id:
            query = query.filter(EducationalContent.topic_id == topic_id)
        if not include_drafts:
            query = query.filter(EducationalContent.published.is_(True))
        return query.order_by(EducationalContent.created_at.desc(), EducationalContent.id.desc()).all()

    async def get_content(self, content_id: int, include_drafts: bool = False) -> Optional[EducationalContent]:
        query = self.db.query(EducationalContent).filter(EducationalContent.id == content_id)
        if not include_drafts:
            query = query.filter(EducationalContent.published.is_(True))
        return query.first()

    async def create_content(self, title: str, topic_id: int, slug: Optional[str] = None, **kwargs) -> EducationalContent:
        content = EducationalContent(title=title, topic_id=topic_id, slug=slug or slugify(title), **kwargs)
        self.db.add(content)
        self.db.commit()
        self.db.refresh(content)
        return content

    async def update_content(self, content_id: int, **fields) -> Optional[EducationalContent]:
        content = await self.get_content(content_id, include_drafts=True)
        if not content:
            return None
        for key, value in fields.items():
            setattr(content, key, value)
        self.db.commit()
        self.db.refresh(content)
        return content

    async def delete_content(self, content_id: int) -> bool:
        content = await self.get_content(content_id, include_drafts=True)
        if not content:
            return False
        self.db.delete(content)
        self.db.commit()
        return True

    async def increment_content_views(self, content_id: int):
        self.db.query(EducationalContent).filter(EducationalContent.id == content_id).update(
            {"views": EducationalContent.views + 1}, synchronize_session=False
        )
        self.db.commit()

    async def like_content(self, content_id: int) -> Optional[int]:
        """Add a like and return the new count."""
        content = await self.get_content(content_id)
        if not content:
            return None
        content.likes += 1
        self.db.commit()
        return content.likes

    # ============ Quizzes ============

    async def list_quizzes(self, content_id: Optional[int] = None) -> List[EducationalQuiz]:
        query = self.db.query(EducationalQuiz)
        if content_id:
            query = query.filter(EducationalQuiz.content_id == content_id)
        return query.order_by(EducationalQuiz.id).all()

    async def get_quiz(self, quiz_id: int) -> Optional[EducationalQuiz]:
        return self.db.query(EducationalQuiz).filter(EducationalQuiz.id == quiz_id).first()

    async def create_quiz(self, **fields) -> EducationalQuiz:
        quiz = EducationalQuiz(**fields)
        self.db.add(quiz)
        self.db.commit()
        self.db.refresh(quiz)
        return quiz

    async def update_quiz(self, quiz_id: int, **fields) -> Optional[EducationalQuiz]:
        quiz = await self.get_quiz(quiz_id)
        if not quiz:
            return None
        for key, value in fields.items():
            setattr(quiz, key, value)
        self.db.commit()
        self.db.refresh(quiz)
        return quiz

    async def delete_quiz(self, quiz_id: int) -> bool:
        quiz = await self.get_quiz(quiz_id)
        if not quiz:
            return False
        self.db.delete(quiz)
        self.db.commit()
        return True

    async def check_answer(self, quiz_id: int, option: int) -> Optional[dict]:
        """Grade an answer; the correct option and explanation are always revealed."""
        quiz = await self.get_quiz(quiz_id)
        if not quiz:
            return None
        return {
            "correct": option == quiz.correct_option,
            "correct_option": quiz.correct_option,
            "explanation": quiz.explanation,
        }

    # ============ Glossary ============

    async def list_terms(self, category: Optional[str] = None) -> List[PoliticalGlossaryTerm]:
        query = self.db.query(PoliticalGlossaryTerm)
        if category:
            query = query.filter(PoliticalGlossaryTerm.category == category)
        return query.order_by(PoliticalGlossaryTerm.term).all()

    async def get_term(self, term_id: int) -> Optional[PoliticalGlossaryTerm]:
        return self.db.query(PoliticalGlossaryTerm).filter(PoliticalGlossaryTerm.id == term_id).first()

    async def find_term(self, term: str) -> Optional[PoliticalGlossaryTerm]:
        """Case-insensitive lookup by term."""
        return self.db.query(PoliticalGlossaryTerm).filter(
            func.lower(PoliticalGlossaryTerm.term) == term.lower()
        ).first()

    async def create_term(self, **fields) -> PoliticalGlossaryTerm:
        entry = PoliticalGlossaryTerm(**fields)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    async def update_term(self, term_id: int, **fields) -> Optional[PoliticalGlossaryTerm]:
        entry = await self.get_term(term_id)
        if not entry:
            return None
        for key, value in fields.items():
            setattr(entry, key, value)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    async def delete_term(self, term_id: int) -> bool:
        entry = await self.get_term(term_id)
        if not entry:
            return False
        self.db.delete(entry)
        self.db.commit()
        return True
