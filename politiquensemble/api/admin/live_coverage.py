"""
Admin endpoints for live coverages: the coverage itself, its editorial team,
the update feed and question moderation.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ...core.cache import response_cache
from ...models.live_coverage import LiveCoverage, QuestionStatus
from ...models.user import User
from ...services.live_coverage_service import LiveCoverageService
from ...services.user_service import UserService
from ..deps import admin_router, get_current_user
from ..live_coverages import (
    LiveCoverageEditorResponse,
    LiveCoverageResponse,
    LiveCoverageUpdateResponse,
    QuestionResponse,
)

router = admin_router("live_coverage")


class LiveCoverageRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: Optional[str] = None
    subject: str
    context: str = ""
    image_url: Optional[str] = None
    active: bool = True


class UpdateLiveCoverageRequest(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    subject: Optional[str] = None
    context: Optional[str] = None
    image_url: Optional[str] = None
    active: Optional[bool] = None


class EditorRequest(BaseModel):
    editor_id: int
    role: Optional[str] = None


class UpdateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    important: bool = False
    timestamp: Optional[datetime] = None
    update_type: str = Field("normal", pattern="^(normal|youtube|article|election)$")
    youtube_url: Optional[str] = None
    article_id: Optional[int] = None
    election_results: Optional[str] = None


class QuestionStatusRequest(BaseModel):
    status: QuestionStatus


class AnswerRequest(BaseModel):
    content: str = Field(..., min_length=1)
    important: bool = False


def _invalidate():
    response_cache.invalidate_prefix("/api/live-coverages", "/api/admin/live-coverages")


async def _coverage_or_404(coverage_id: int, service: LiveCoverageService) -> LiveCoverage:
    coverage = await service.get_coverage(coverage_id)
    if not coverage:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Direct introuvable")
    return coverage


# ============ Coverages ============

@router.get("", response_model=List[LiveCoverageResponse])
async def list_coverages(service: LiveCoverageService = Depends()):
    """All coverages, finished ones included."""
    return await service.list_coverages()


@router.get("/{coverage_id}", response_model=LiveCoverageResponse)
async def get_coverage(coverage_id: int, service: LiveCoverageService = Depends()):
    return await _coverage_or_404(coverage_id, service)


@router.post("", response_model=LiveCoverageResponse, status_code=status.HTTP_201_CREATED)
async def create_coverage(body: LiveCoverageRequest, service: LiveCoverageService = Depends()):
    coverage = await service.create_coverage(**body.model_dump())
    _invalidate()
    return coverage


@router.put("/{coverage_id}", response_model=LiveCoverageResponse)
async def update_coverage(coverage_id: int, body: UpdateLiveCoverageRequest, service: LiveCoverageService = Depends()):
    coverage = await service.update_coverage(coverage_id, **body.model_dump(exclude_unset=True))
    if not coverage:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Direct introuvable")
    _invalidate()
    return coverage


@router.delete("/{coverage_id}")
async def delete_coverage(coverage_id: int, service: LiveCoverageService = Depends()):
    if not await service.delete_coverage(coverage_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Direct introuvable")
    _invalidate()
    return {"message": "Direct supprimé"}


# ============ Editors ============

@router.get("/{coverage_id}/editors", response_model=List[LiveCoverageEditorResponse])
async def list_editors(coverage_id: int, service: LiveCoverageService = Depends()):
    await _coverage_or_404(coverage_id, service)
    return await service.list_editors(coverage_id)


@router.post("/{coverage_id}/editors", response_model=LiveCoverageEditorResponse, status_code=status.HTTP_201_CREATED)
async def add_editor(
    coverage_id: int,
    body: EditorRequest,
    service: LiveCoverageService = Depends(),
    user_service: UserService = Depends()
):
    await _coverage_or_404(coverage_id, service)
    if not await user_service.get_by_id(body.editor_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Utilisateur inconnu")
    editor = await service.add_editor(coverage_id, body.editor_id, body.role)
    _invalidate()
    return editor


@router.delete("/{coverage_id}/editors/{editor_id}")
async def remove_editor(coverage_id: int, editor_id: int, service: LiveCoverageService = Depends()):
    if not await service.remove_editor(coverage_id, editor_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Éditeur introuvable")
    _invalidate()
    return {"message": "Éditeur retiré"}


# ============ Updates ============

@router.get("/{coverage_id}/updates", response_model=List[LiveCoverageUpdateResponse])
async def list_updates(coverage_id: int, service: LiveCoverageService = Depends()):
    await _coverage_or_404(coverage_id, service)
    return await service.list_updates(coverage_id)


@router.post("/{coverage_id}/updates", response_model=LiveCoverageUpdateResponse, status_code=status.HTTP_201_CREATED)
async def create_update(
    coverage_id: int,
    body: UpdateRequest,
    user: User = Depends(get_current_user),
    service: LiveCoverageService = Depends()
):
    """Post to the feed as the current user."""
    await _coverage_or_404(coverage_id, service)
    update = await service.create_update(coverage_id, author_id=user.id, **body.model_dump())
    _invalidate()
    return update


@router.delete("/{coverage_id}/updates/{update_id}")
async def delete_update(coverage_id: int, update_id: int, service: LiveCoverageService = Depends()):
    if not await service.delete_update(coverage_id, update_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mise à jour introuvable")
    _invalidate()
    return {"message": "Mise à jour supprimée"}


# ============ Questions ============

@router.get("/{coverage_id}/questions", response_model=List[QuestionResponse])
async def list_questions(
    coverage_id: int,
    status_filter: Optional[QuestionStatus] = Query(None, alias="status"),
    service: LiveCoverageService = Depends()
):
    await _coverage_or_404(coverage_id, service)
    return await service.list_questions(coverage_id, status=status_filter.value if status_filter else None)


@router.put("/{coverage_id}/questions/{question_id}", response_model=QuestionResponse)
async def moderate_question(
    coverage_id: int,
    question_id: int,
    body: QuestionStatusRequest,
    service: LiveCoverageService = Depends()
):
    question = await service.set_question_status(coverage_id, question_id, body.status.value)
    if not question:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question introuvable")
    _invalidate()
    return question


@router.post(
    "/{coverage_id}/questions/{question_id}/answer",
    response_model=LiveCoverageUpdateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def answer_question(
    coverage_id: int,
    question_id: int,
    body: AnswerRequest,
    user: User = Depends(get_current_user),
    service: LiveCoverageService = Depends()
):
    """Answer a question in the feed; the question becomes approved and answered."""
    update = await service.answer_question(
        coverage_id, question_id, body.content, author_id=user.id, important=body.important
    )
    if not update:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question introuvable")
    _invalidate()
    return update
