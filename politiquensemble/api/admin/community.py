"""
Admin endpoints for newsletter subscribers, team applications and contact
messages.
"""

from typing import List, Optional

from fastapi import Depends, HTTPException, Query, status
from pydantic import BaseModel

from ...core.cache import response_cache
from ...models.community import ApplicationStatus
from ...models.user import User
from ...services.community_service import CommunityService
from ..community import ApplicationResponse, ContactMessageResponse, SubscriberResponse
from ..deps import admin_router, get_current_user

newsletter_router = admin_router("newsletter")
applications_router = admin_router("applications")
messages_router = admin_router("messages")


class ReviewApplicationRequest(BaseModel):
    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = None


class UpdateMessageRequest(BaseModel):
    is_read: Optional[bool] = None
    assigned_to: Optional[int] = None


# ============ Newsletter ============

@newsletter_router.get("/subscribers", response_model=List[SubscriberResponse])
async def list_subscribers(active_only: bool = False, community_service: CommunityService = Depends()):
    return await community_service.list_subscribers(active_only=active_only)


@newsletter_router.delete("/subscribers/{subscriber_id}")
async def delete_subscriber(subscriber_id: int, community_service: CommunityService = Depends()):
    if not await community_service.delete_subscriber(subscriber_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Abonné introuvable")
    response_cache.invalidate_prefix("/api/admin/newsletter")
    return {"message": "Abonné supprimé"}


# ============ Team applications ============

@applications_router.get("", response_model=List[ApplicationResponse])
async def list_applications(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    community_service: CommunityService = Depends()
):
    return await community_service.list_applications(status=status_filter.value if status_filter else None)


@applications_router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: int, community_service: CommunityService = Depends()):
    application = await community_service.get_application(application_id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidature introuvable")
    return application


@applications_router.put("/{application_id}", response_model=ApplicationResponse)
async def review_application(
    application_id: int,
    body: ReviewApplicationRequest,
    user: User = Depends(get_current_user),
    community_service: CommunityService = Depends()
):
    """Change the status and/or internal notes; the reviewer is recorded."""
    application = await community_service.review_application(
        application_id,
        reviewer_id=user.id,
        status=body.status.value if body.status else None,
        notes=body.notes,
    )
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidature introuvable")
    response_cache.invalidate_prefix("/api/admin/applications")
    return application


@applications_router.delete("/{application_id}")
async def delete_application(application_id: int, community_service: CommunityService = Depends()):
    if not await community_service.delete_application(application_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidature introuvable")
    response_cache.invalidate_prefix("/api/admin/applications")
    return {"message": "Candidature supprimée"}


# ============ Contact messages ============

@messages_router.get("", response_model=List[ContactMessageResponse])
async def list_messages(unread_only: bool = False, community_service: CommunityService = Depends()):
    return await community_service.list_messages(unread_only=unread_only)


@messages_router.put("/{message_id}", response_model=ContactMessageResponse)
async def update_message(message_id: int, body: UpdateMessageRequest, community_service: CommunityService = Depends()):
    message = await community_service.update_message(message_id, **body.model_dump(exclude_unset=True))
    if not message:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message introuvable")
    response_cache.invalidate_prefix("/api/admin/contact-messages")
    return message


@messages_router.delete("/{message_id}")
async def delete_message(message_id: int, community_service: CommunityService = Depends()):
    if not await community_service.delete_message(message_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message introuvable")
    response_cache.invalidate_prefix("/api/admin/contact-messages")
    return {"message": "Message supprimé"}
