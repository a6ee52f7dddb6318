"""
Live coverage models: an event followed in real time with timestamped
updates, moderated audience questions and an assigned editorial team.
"""

from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base


class QuestionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LiveCoverage(Base):
    __tablename__ = "live_coverages"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    slug = Column(String(500), unique=True, index=True, nullable=False)
    subject = Column(Text, nullable=False)
    context = Column(Text, default="")
    image_url = Column(String(500), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    editors = relationship("LiveCoverageEditor", back_populates="coverage", cascade="all, delete-orphan")
    updates = relationship("LiveCoverageUpdate", back_populates="coverage", cascade="all, delete-orphan")
    questions = relationship("LiveCoverageQuestion", back_populates="coverage", cascade="all, delete-orphan")


class LiveCoverageEditor(Base):
    """Editor assigned to a coverage, with an optional coverage-specific role."""
    __tablename__ = "live_coverage_editors"

    id = Column(Integer, primary_key=True, index=True)
    coverage_id = Column(Integer, ForeignKey("live_coverages.id"), nullable=False, index=True)
    editor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    role = Column(String(100), nullable=True)

    coverage = relationship("LiveCoverage", back_populates="editors")
    editor = relationship("User")


class LiveCoverageQuestion(Base):
    """Visitor question, shown once approved by the team."""
    __tablename__ = "live_coverage_questions"

    id = Column(Integer, primary_key=True, index=True)
    coverage_id = Column(Integer, ForeignKey("live_coverages.id"), nullable=False, index=True)
    username = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)
    status = Column(String(20), nullable=False, default=QuestionStatus.PENDING.value)
    answered = Column(Boolean, default=False)

    coverage = relationship("LiveCoverage", back_populates="questions")


class LiveCoverageUpdate(Base):
    """One entry of the live feed. Answers to questions are updates too."""
    __tablename__ = "live_coverage_updates"

    id = Column(Integer, primary_key=True, index=True)
    coverage_id = Column(Integer, ForeignKey("live_coverages.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)
    image_url = Column(String(500), nullable=True)
    important = Column(Boolean, default=False)

    # Answers to visitor questions
    is_answer = Column(Boolean, default=False)
    question_id = Column(Integer, ForeignKey("live_coverage_questions.id"), nullable=True)

    # Rich content: normal, youtube, article, election
    update_type = Column(String(20), default="normal")
    youtube_url = Column(String(500), nullable=True)
    article_id = Column(Integer, ForeignKey("articles.id"), nullable=True)
    election_results = Column(Text, nullable=True)  # JSON string

    coverage = relationship("LiveCoverage", back_populates="updates")
    author = relationship("User")
    question = relationship("LiveCoverageQuestion")
