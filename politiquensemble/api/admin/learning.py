"""
Admin endpoints for the educational section and the glossary.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from pydantic import BaseModel, Field

from ...core.cache import response_cache
from ...models.user import User
from ...services.learning_service import LearningService
from ..deps import admin_router, get_current_user
from ..glossary import GlossaryTermResponse
from ..learning import ContentResponse, TopicResponse

topics_router = admin_router("educational_topics")
content_router = admin_router("educational_content")
quizzes_router = admin_router("educational_content")
glossary_router = admin_router("glossary")


class TopicRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: Optional[str] = None
    description: str
    image_url: str
    icon: Optional[str] = None
    color: str = "#3B82F6"
    order: int = 0


class UpdateTopicRequest(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    order: Optional[int] = None


class ContentRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: Optional[str] = None
    content: str
    summary: str
    image_url: str
    topic_id: int
    published: bool = True


class UpdateContentRequest(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    image_url: Optional[str] = None
    topic_id: Optional[int] = None
    published: Optional[bool] = None


class QuizRequest(BaseModel):
    content_id: int
    question: str = Field(..., min_length=1)
    option1: str
    option2: str
    option3: str
    correct_option: int = Field(..., ge=1, le=3)
    explanation: Optional[str] = None


class UpdateQuizRequest(BaseModel):
    question: Optional[str] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    correct_option: Optional[int] = Field(None, ge=1, le=3)
    explanation: Optional[str] = None


class QuizResponse(BaseModel):
    """Full quiz, answer included."""
    id: int
    content_id: int
    question: str
    option1: str
    option2: str
    option3: str
    correct_option: int
    explanation: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GlossaryTermRequest(BaseModel):
    term: str = Field(..., min_length=1, max_length=200)
    definition: str = Field(..., min_length=1)
    examples: Optional[str] = None
    category: Optional[str] = None


class UpdateGlossaryTermRequest(BaseModel):
    term: Optional[str] = None
    definition: Optional[str] = None
    examples: Optional[str] = None
    category: Optional[str] = None


def _invalidate_learning():
    response_cache.invalidate_prefix(
        "/api/educational-topics",
        "/api/educational-content",
        "/api/admin/educational-topics",
        "/api/admin/educational-content",
        "/api/admin/quizzes",
    )


def _not_found(label: str):
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} introuvable")


# ============ Topics ============

@topics_router.get("", response_model=List[TopicResponse])
async def list_topics(learning_service: LearningService = Depends()):
    return await learning_service.list_topics()


@topics_router.post("", response_model=TopicResponse, status_code=status.HTTP_201_CREATED)
async def create_topic(
    body: TopicRequest,
    user: User = Depends(get_current_user),
    learning_service: LearningService = Depends()
):
    topic = await learning_service.create_topic(author_id=user.id, **body.model_dump())
    _invalidate_learning()
    return topic


@topics_router.put("/{topic_id}", response_model=TopicResponse)
async def update_topic(topic_id: int, body: UpdateTopicRequest, learning_service: LearningService = Depends()):
    topic = await learning_service.update_topic(topic_id, **body.model_dump(exclude_unset=True))
    if not topic:
        raise _not_found("Sujet")
    _invalidate_learning()
    return topic


@topics_router.delete("/{topic_id}")
async def delete_topic(topic_id: int, learning_service: LearningService = Depends()):
    if not await learning_service.delete_topic(topic_id):
        raise _not_found("Sujet")
    _invalidate_learning()
    return {"message": "Sujet supprimé"}


# ============ Lessons ============

@content_router.get("", response_model=List[ContentResponse])
async def list_contents(topic_id: Optional[int] = None, learning_service: LearningService = Depends()):
    return await learning_service.list_contents(topic_id=topic_id, include_drafts=True)


@content_router.get("/{content_id}", response_model=ContentResponse)
async def get_content(content_id: int, learning_service: LearningService = Depends()):
    content = await learning_service.get_content(content_id, include_drafts=True)
    if not content:
        raise _not_found("Contenu")
    return content


@content_router.post("", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    body: ContentRequest,
    user: User = Depends(get_current_user),
    learning_service: LearningService = Depends()
):
    if not await learning_service.get_topic(body.topic_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Sujet inconnu")
    content = await learning_service.create_content(author_id=user.id, **body.model_dump())
    _invalidate_learning()
    return content


@content_router.put("/{content_id}", response_model=ContentResponse)
async def update_content(content_id: int, body: UpdateContentRequest, learning_service: LearningService = Depends()):
    content = await learning_service.update_content(content_id, **body.model_dump(exclude_unset=True))
    if not content:
        raise _not_found("Contenu")
    _invalidate_learning()
    return content


@content_router.delete("/{content_id}")
async def delete_content(content_id: int, learning_service: LearningService = Depends()):
    if not await learning_service.delete_content(content_id):
        raise _not_found("Contenu")
    _invalidate_learning()
    return {"message": "Contenu supprimé"}


# ============ Quizzes ============

@quizzes_router.get("", response_model=List[QuizResponse])
async def list_quizzes(content_id: Optional[int] = None, learning_service: LearningService = Depends()):
    return await learning_service.list_quizzes(content_id=content_id)


@quizzes_router.post("", response_model=QuizResponse, status_code=status.HTTP_201_CREATED)
async def create_quiz(body: QuizRequest, learning_service: LearningService = Depends()):
    if not await learning_service.get_content(body.content_id, include_drafts=True):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Contenu inconnu")
    quiz = await learning_service.create_quiz(**body.model_dump())
    _invalidate_learning()
    return quiz


@quizzes_router.put("/{quiz_id}", response_model=QuizResponse)
async def update_quiz(quiz_id: int, body: UpdateQuizRequest, learning_service: LearningService = Depends()):
    quiz = await learning_service.update_quiz(quiz_id, **body.model_dump(exclude_unset=True))
    if not quiz:
        raise _not_found("Quiz")
    _invalidate_learning()
    return quiz


@quizzes_router.delete("/{quiz_id}")
async def delete_quiz(quiz_id: int, learning_service: LearningService = Depends()):
    if not await learning_service.delete_quiz(quiz_id):
        raise _not_found("Quiz")
    _invalidate_learning()
    return {"message": "Quiz supprimé"}


# ============ Glossary ============

@glossary_router.get("", response_model=List[GlossaryTermResponse])
async def list_terms(learning_service: LearningService = Depends()):
    return await learning_service.list_terms()


@glossary_router.post("", response_model=GlossaryTermResponse, status_code=status.HTTP_201_CREATED)
async def create_term(body: GlossaryTermRequest, learning_service: LearningService = Depends()):
    if await learning_service.find_term(body.term):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ce terme existe déjà")
    entry = await learning_service.create_term(**body.model_dump())
    response_cache.invalidate_prefix("/api/glossary", "/api/admin/glossary")
    return entry


@glossary_router.put("/{term_id}", response_model=GlossaryTermResponse)
async def update_term(term_id: int, body: UpdateGlossaryTermRequest, learning_service: LearningService = Depends()):
    entry = await learning_service.update_term(term_id, **body.model_dump(exclude_unset=True))
    if not entry:
        raise _not_found("Terme")
    response_cache.invalidate_prefix("/api/glossary", "/api/admin/glossary")
    return entry


@glossary_router.delete("/{term_id}")
async def delete_term(term_id: int, learning_service: LearningService = Depends()):
    if not await learning_service.delete_term(term_id):
        raise _not_found("Terme")
    response_cache.invalidate_prefix("/api/glossary", "/api/admin/glossary")
    return {"message": "Terme supprimé"}
