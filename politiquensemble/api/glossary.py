"""
Political glossary endpoints.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..core.cache import CachedRoute, cache_lookup
from ..services.learning_service import LearningService

router = APIRouter(route_class=CachedRoute)


class GlossaryTermResponse(BaseModel):
    id: int
    term: str
    definition: str
    examples: Optional[str]
    category: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=List[GlossaryTermResponse], dependencies=[Depends(cache_lookup)])
async def list_terms(category: Optional[str] = None, learning_service: LearningService = Depends()):
    """Alphabetical glossary, optionally restricted to one category."""
    return await learning_service.list_terms(category=category)


@router.get("/{term}", response_model=GlossaryTermResponse, dependencies=[Depends(cache_lookup)])
async def get_term(term: str, learning_service: LearningService = Depends()):
    entry = await learning_service.find_term(term)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Terme introuvable")
    return entry
