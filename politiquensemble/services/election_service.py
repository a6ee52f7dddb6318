"""
Election Service
Election results by country and the reactions attached to them.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..models.election import Election, ElectionReaction


class ElectionService:
    """Service for election operations."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    async def list_elections(self) -> List[Election]:
        return self.db.query(Election).order_by(Election.date.desc(), Election.id.desc()).all()

    async def list_upcoming(self, limit: int = 4) -> List[Election]:
        """Elections flagged upcoming whose date is still ahead, soonest first."""
        return self.db.query(Election).filter(
            Election.upcoming.is_(True),
            Election.date > datetime.utcnow(),
        ).order_by(Election.date.asc()).limit(limit).all()

    async def list_recent(self, limit: int = 2) -> List[Election]:
        return self.db.query(Election).filter(
            Election.upcoming.is_(False),
            Election.date < datetime.utcnow(),
        ).order_by(Election.date.desc()).limit(limit).all()

    async def list_by_country(self, country_code: str) -> List[Election]:
        return self.db.query(Election).filter(
            Election.country_code == country_code.upper()
        ).order_by(Election.date.desc()).all()

    async def get_election(self, election_id: int) -> Optional[Election]:
        return self.db.query(Election).filter(Election.id == election_id).first()

    async def create_election(self, **fields) -> Election:
        if fields.get("country_code"):
            fields["country_code"] = fields["country_code"].upper()
        election = Election(**fields)
        self.db.add(election)
        self.db.commit()
        self.db.refresh(election)
        return election

    async def update_election(self, election_id: int, **fields) -> Optional[Election]:
        election = await self.get_election(election_id)
        if not election:
            return None
        if fields.get("country_code"):
            fields["country_code"] = fields["country_code"].upper()
        for key, value in fields.items():
            setattr(election, key, value)
        self.db.commit()
        self.db.refresh(election)
        return election

    async def delete_election(self, election_id: int) -> bool:
        election = await self.get_election(election_id)
        if not election:
            return False
        self.db.delete(election)
        self.db.commit()
        return True

    # ============ Reactions ============

    async def list_reactions(self, election_id: int) -> List[ElectionReaction]:
        return self.db.query(ElectionReaction).filter(
            ElectionReaction.election_id == election_id
        ).order_by(ElectionReaction.created_at.desc(), ElectionReaction.id.desc()).all()

    async def create_reaction(self, election_id: int, author: str, content: str) -> ElectionReaction:
        reaction = ElectionReaction(election_id=election_id, author=author, content=content)
        self.db.add(reaction)
        self.db.commit()
        self.db.refresh(reaction)
        return reaction

    async def delete_reaction(self, election_id: int, reaction_id: int) -> bool:
        deleted = self.db.query(ElectionReaction).filter(
            ElectionReaction.id == reaction_id,
            ElectionReaction.election_id == election_id,
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0
