"""
Reader submissions: newsletter, team applications and contact form.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from ..core.cache import CachedRoute, cache_lookup, response_cache
from ..services.community_service import CommunityService
from ..services.user_service import UserService

newsletter_router = APIRouter()
team_router = APIRouter(route_class=CachedRoute)
contact_router = APIRouter()


class NewsletterRequest(BaseModel):
    email: EmailStr


class SubscriberResponse(BaseModel):
    id: int
    email: str
    subscription_date: datetime
    active: bool

    class Config:
        from_attributes = True


class ApplicationRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = None
    position: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    cv_url: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str]
    position: str
    message: str
    cv_url: Optional[str]
    status: str
    submission_date: datetime
    reviewed_at: Optional[datetime]
    reviewed_by: Optional[int]
    notes: Optional[str]

    class Config:
        from_attributes = True


class TeamMemberResponse(BaseModel):
    id: int
    display_name: str
    avatar_url: Optional[str]
    title: Optional[str]
    bio: Optional[str]

    class Config:
        from_attributes = True


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(..., min_length=1, max_length=500)
    message: str = Field(..., min_length=1)


class ContactMessageResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str]
    subject: str
    message: str
    created_at: datetime
    is_read: bool
    assigned_to: Optional[int]

    class Config:
        from_attributes = True


@newsletter_router.post("/subscribe", status_code=status.HTTP_201_CREATED)
async def subscribe(body: NewsletterRequest, community_service: CommunityService = Depends()):
    await community_service.subscribe(body.email)
    response_cache.invalidate_prefix("/api/admin/newsletter")
    return {"message": "Inscription à la newsletter confirmée"}


@newsletter_router.post("/unsubscribe")
async def unsubscribe(body: NewsletterRequest, community_service: CommunityService = Depends()):
    """Unknown addresses get the same answer so the list cannot be probed."""
    await community_service.unsubscribe(body.email)
    response_cache.invalidate_prefix("/api/admin/newsletter")
    return {"message": "Désinscription effectuée"}


@team_router.post("/applications", status_code=status.HTTP_201_CREATED)
async def apply(body: ApplicationRequest, community_service: CommunityService = Depends()):
    application = await community_service.create_application(**body.model_dump())
    response_cache.invalidate_prefix("/api/admin/applications")
    return {"message": "Candidature envoyée", "id": application.id}


@team_router.get("/members", response_model=List[TeamMemberResponse], dependencies=[Depends(cache_lookup)])
async def team_members(user_service: UserService = Depends()):
    return await user_service.list_team_members()


@contact_router.post("", status_code=status.HTTP_201_CREATED)
async def contact(body: ContactRequest, community_service: CommunityService = Depends()):
    message = await community_service.create_message(**body.model_dump())
    response_cache.invalidate_prefix("/api/admin/contact-messages")
    return {"message": "Message envoyé", "id": message.id}
