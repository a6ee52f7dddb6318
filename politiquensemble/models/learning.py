"""
Educational models: topics group lessons, lessons carry multiple-choice
quizzes. The political glossary lives here too.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base


class EducationalTopic(Base):
    """Main topic of the "Apprendre" section."""
    __tablename__ = "educational_topics"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    slug = Column(String(500), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False)
    icon = Column(String(100), nullable=True)  # Lucide icon name
    color = Column(String(20), nullable=False, default="#3B82F6")
    order = Column(Integer, nullable=False, default=0)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    contents = relationship("EducationalContent", back_populates="topic", cascade="all, delete-orphan")


class EducationalContent(Base):
    """A lesson within a topic."""
    __tablename__ = "educational_content"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    slug = Column(String(500), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    summary = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False)
    topic_id = Column(Integer, ForeignKey("educational_topics.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    published = Column(Boolean, nullable=False, default=True)
    likes = Column(Integer, nullable=False, default=0)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    topic = relationship("EducationalTopic", back_populates="contents")
    quizzes = relationship("EducationalQuiz", back_populates="content", cascade="all, delete-orphan")


class EducationalQuiz(Base):
    """Three-option multiple-choice question attached to a lesson."""
    __tablename__ = "educational_quizzes"

    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(Integer, ForeignKey("educational_content.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    option1 = Column(Text, nullable=False)
    option2 = Column(Text, nullable=False)
    option3 = Column(Text, nullable=False)
    correct_option = Column(Integer, nullable=False)  # 1, 2 or 3
    explanation = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    content = relationship("EducationalContent", back_populates="quizzes")

    def option_text(self, option: int) -> str:
        return {1: self.option1, 2: self.option2, 3: self.option3}[option]


class PoliticalGlossaryTerm(Base):
    __tablename__ = "political_glossary"

    id = Column(Integer, primary_key=True, index=True)
    term = Column(String(200), unique=True, nullable=False, index=True)
    definition = Column(Text, nullable=False)
    examples = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
