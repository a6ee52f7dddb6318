"""
Election models. Results are stored as embedded JSON:
``[{"candidate": ..., "party": ..., "percentage": ..., "color": ...}]``
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON
from sqlalchemy.orm import relationship

from ..core.database import Base


class Election(Base):
    __tablename__ = "elections"

    id = Column(Integer, primary_key=True, index=True)
    country = Column(String(100), nullable=False)
    country_code = Column(String(10), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    date = Column(DateTime, nullable=False)
    type = Column(String(50), nullable=False)  # presidential, legislative, local...
    results = Column(JSON, nullable=False)
    description = Column(Text, nullable=True)
    upcoming = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    reactions = relationship("ElectionReaction", back_populates="election", cascade="all, delete-orphan")


class ElectionReaction(Base):
    """Free-text reaction to an election result (politician, analyst...)."""
    __tablename__ = "election_reactions"

    id = Column(Integer, primary_key=True, index=True)
    election_id = Column(Integer, ForeignKey("elections.id", ondelete="CASCADE"), nullable=False, index=True)
    author = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    election = relationship("Election", back_populates="reactions")
