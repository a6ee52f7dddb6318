"""
Live coverage endpoints.
Readers follow the feed and submit questions for the editorial team.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..core.cache import CachedRoute, cache_lookup, response_cache
from ..models.live_coverage import LiveCoverage, QuestionStatus
from ..services.live_coverage_service import LiveCoverageService
from .articles import AuthorResponse

router = APIRouter(route_class=CachedRoute)


class LiveCoverageResponse(BaseModel):
    id: int
    title: str
    slug: str
    subject: str
    context: Optional[str]
    image_url: Optional[str]
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LiveCoverageUpdateResponse(BaseModel):
    id: int
    coverage_id: int
    content: str
    author_id: Optional[int]
    timestamp: datetime
    image_url: Optional[str]
    important: Optional[bool]
    is_answer: Optional[bool]
    question_id: Optional[int]
    update_type: Optional[str]
    youtube_url: Optional[str]
    article_id: Optional[int]
    election_results: Optional[str]
    author: Optional[AuthorResponse] = None

    class Config:
        from_attributes = True


class LiveCoverageEditorResponse(BaseModel):
    id: int
    coverage_id: int
    editor_id: int
    role: Optional[str]
    editor: Optional[AuthorResponse] = None

    class Config:
        from_attributes = True


class QuestionRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)


class QuestionResponse(BaseModel):
    id: int
    coverage_id: int
    username: str
    content: str
    timestamp: datetime
    status: str
    answered: Optional[bool]

    class Config:
        from_attributes = True


async def _coverage_or_404(slug: str, service: LiveCoverageService) -> LiveCoverage:
    coverage = await service.get_coverage_by_slug(slug)
    if not coverage:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Direct introuvable")
    return coverage


@router.get("", response_model=List[LiveCoverageResponse], dependencies=[Depends(cache_lookup)])
async def list_live_coverages(service: LiveCoverageService = Depends()):
    """Coverages currently running."""
    return await service.list_coverages(active_only=True)


@router.get("/{slug}", response_model=LiveCoverageResponse, dependencies=[Depends(cache_lookup)])
async def get_live_coverage(slug: str, service: LiveCoverageService = Depends()):
    return await _coverage_or_404(slug, service)


@router.get("/{slug}/updates", response_model=List[LiveCoverageUpdateResponse], dependencies=[Depends(cache_lookup)])
async def list_updates(slug: str, service: LiveCoverageService = Depends()):
    coverage = await _coverage_or_404(slug, service)
    return await service.list_updates(coverage.id)


@router.get("/{slug}/editors", response_model=List[LiveCoverageEditorResponse], dependencies=[Depends(cache_lookup)])
async def list_editors(slug: str, service: LiveCoverageService = Depends()):
    coverage = await _coverage_or_404(slug, service)
    return await service.list_editors(coverage.id)


@router.get("/{slug}/questions", response_model=List[QuestionResponse], dependencies=[Depends(cache_lookup)])
async def list_approved_questions(slug: str, service: LiveCoverageService = Depends()):
    """Only moderated questions are public."""
    coverage = await _coverage_or_404(slug, service)
    return await service.list_questions(coverage.id, status=QuestionStatus.APPROVED.value)


@router.post("/{slug}/questions", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def submit_question(slug: str, body: QuestionRequest, service: LiveCoverageService = Depends()):
    """Submit a question; it waits for moderation."""
    coverage = await _coverage_or_404(slug, service)
    if not coverage.active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ce direct est terminé")
    question = await service.submit_question(coverage.id, body.username, body.content)
    response_cache.invalidate_prefix(f"/api/admin/live-coverages/{coverage.id}/questions")
    return question
