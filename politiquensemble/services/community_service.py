"""
Community Service
Newsletter subscriptions, team applications and contact messages.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.logging_config import get_logger
from ..models.community import ContactMessage, NewsletterSubscriber, TeamApplication

logger = get_logger(__name__)


class CommunityService:
    """Service for reader submissions."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    # ============ Newsletter ============

    async def subscribe(self, email: str) -> NewsletterSubscriber:
        """Subscribe an email; a previously unsubscribed address is reactivated."""
        email = email.strip().lower()
        subscriber = self.db.query(NewsletterSubscriber).filter(NewsletterSubscriber.email == email).first()
        if subscriber:
            subscriber.active = True
        else:
            subscriber = NewsletterSubscriber(email=email)
            self.db.add(subscriber)
        self.db.commit()
        self.db.refresh(subscriber)
        return subscriber

    async def unsubscribe(self, email: str) -> bool:
        subscriber = self.db.query(NewsletterSubscriber).filter(
            NewsletterSubscriber.email == email.strip().lower()
        ).first()
        if not subscriber:
            return False
        subscriber.active = False
        self.db.commit()
        return True

    async def list_subscribers(self, active_only: bool = False) -> List[NewsletterSubscriber]:
        query = self.db.query(NewsletterSubscriber)
        if active_only:
            query = query.filter(NewsletterSubscriber.active.is_(True))
        return query.order_by(NewsletterSubscriber.subscription_date.desc()).all()

    async def delete_subscriber(self, subscriber_id: int) -> bool:
        deleted = self.db.query(NewsletterSubscriber).filter(
            NewsletterSubscriber.id == subscriber_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    # ============ Team applications ============

    async def create_application(self, **fields) -> TeamApplication:
        application = TeamApplication(**fields)
        self.db.add(application)
        self.db.commit()
        self.db.refresh(application)
        logger.info("Team application received for %s", application.position)
        return application

    async def list_applications(self, status: Optional[str] = None) -> List[TeamApplication]:
        query = self.db.query(TeamApplication)
        if status:
            query = query.filter(TeamApplication.status == status)
        return query.order_by(TeamApplication.submission_date.desc(), TeamApplication.id.desc()).all()

    async def get_application(self, application_id: int) -> Optional[TeamApplication]:
        return self.db.query(TeamApplication).filter(TeamApplication.id == application_id).first()

    async def review_application(
        self,
        application_id: int,
        reviewer_id: int,
        status: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Optional[TeamApplication]:
        """Record a review: status and/or notes, stamped with reviewer and time."""
        application = await self.get_application(application_id)
        if not application:
            return None
        if status is not None:
            application.status = status
        if notes is not None:
            application.notes = notes
        application.reviewed_at = datetime.utcnow()
        application.reviewed_by = reviewer_id
        self.db.commit()
        self.db.refresh(application)
        return application

    async def delete_application(self, application_id: int) -> bool:
        deleted = self.db.query(TeamApplication).filter(
            TeamApplication.id == application_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    # ============ Contact messages ============

    async def create_message(self, **fields) -> ContactMessage:
        message = ContactMessage(**fields)
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    async def list_messages(self, unread_only: bool = False) -> List[ContactMessage]:
        query = self.db.query(ContactMessage)
        if unread_only:
            query = query.filter(ContactMessage.is_read.is_(False))
        return query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all()

    async def get_message(self, message_id: int) -> Optional[ContactMessage]:
        return self.db.query(ContactMessage).filter(ContactMessage.id == message_id).first()

    async def update_message(self, message_id: int, **fields) -> Optional[ContactMessage]:
        """Mark read/unread or assign to a team member."""
        message = await self.get_message(message_id)
        if not message:
            return None
        for key, value in fields.items():
            setattr(message, key, value)
        self.db.commit()
        self.db.refresh(message)
        return message

    async def delete_message(self, message_id: int) -> bool:
        deleted = self.db.query(ContactMessage).filter(
            ContactMessage.id == message_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0
