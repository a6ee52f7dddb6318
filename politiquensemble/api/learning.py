"""
Educational section endpoints: topics, lessons and quizzes.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..core.cache import CachedRoute, cache_lookup, response_cache
from ..services.learning_service import LearningService

topics_router = APIRouter(route_class=CachedRoute)
content_router = APIRouter(route_class=CachedRoute)
quizzes_router = APIRouter()


class TopicResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    image_url: str
    icon: Optional[str]
    color: str
    order: int
    author_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ContentResponse(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    summary: str
    image_url: str
    topic_id: int
    author_id: Optional[int]
    published: bool
    likes: int
    views: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicQuizResponse(BaseModel):
    """Quiz as shown to readers: the answer stays hidden."""
    id: int
    content_id: int
    question: str
    option1: str
    option2: str
    option3: str

    class Config:
        from_attributes = True


class QuizAnswerRequest(BaseModel):
    option: int = Field(..., ge=1, le=3)


class QuizAnswerResponse(BaseModel):
    correct: bool
    correct_option: int
    explanation: Optional[str]


# ============ Topics ============

@topics_router.get("", response_model=List[TopicResponse], dependencies=[Depends(cache_lookup)])
async def list_topics(learning_service: LearningService = Depends()):
    return await learning_service.list_topics()


@topics_router.get("/{slug}", response_model=TopicResponse, dependencies=[Depends(cache_lookup)])
async def get_topic(slug: str, learning_service: LearningService = Depends()):
    topic = await learning_service.get_topic_by_slug(slug)
    if not topic:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sujet introuvable")
    return topic


@topics_router.get("/{slug}/content", response_model=List[ContentResponse], dependencies=[Depends(cache_lookup)])
async def list_topic_content(slug: str, learning_service: LearningService = Depends()):
    topic = await learning_service.get_topic_by_slug(slug)
    if not topic:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sujet introuvable")
    return await learning_service.list_contents(topic_id=topic.id)


# ============ Lessons ============

@content_router.get("/{content_id}", response_model=ContentResponse)
async def get_content(content_id: int, learning_service: LearningService = Depends()):
    """Get a published lesson and count the view."""
    content = await learning_service.get_content(content_id)
    if not content:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contenu introuvable")
    await learning_service.increment_content_views(content_id)
    content.views += 1
    return content


@content_router.get("/{content_id}/quizzes", response_model=List[PublicQuizResponse], dependencies=[Depends(cache_lookup)])
async def list_content_quizzes(content_id: int, learning_service: LearningService = Depends()):
    return await learning_service.list_quizzes(content_id=content_id)


@content_router.post("/{content_id}/like")
async def like_content(content_id: int, learning_service: LearningService = Depends()):
    likes = await learning_service.like_content(content_id)
    if likes is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contenu introuvable")
    response_cache.invalidate_prefix("/api/educational-topics", "/api/admin/educational-content")
    return {"likes": likes}


# ============ Quizzes ============

@quizzes_router.post("/{quiz_id}/answer", response_model=QuizAnswerResponse)
async def answer_quiz(quiz_id: int, body: QuizAnswerRequest, learning_service: LearningService = Depends()):
    result = await learning_service.check_answer(quiz_id, body.option)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz introuvable")
    return result
