"""
Election endpoints: results by country, upcoming votes and reactions.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..core.cache import CachedRoute, cache_lookup, response_cache
from ..services.election_service import ElectionService

router = APIRouter(route_class=CachedRoute)


class CandidateResult(BaseModel):
    candidate: str
    party: Optional[str] = None
    percentage: float
    votes: Optional[int] = None
    color: Optional[str] = None


class ElectionResponse(BaseModel):
    id: int
    country: str
    country_code: str
    title: str
    date: datetime
    type: str
    results: List[CandidateResult]
    description: Optional[str]
    upcoming: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ReactionRequest(BaseModel):
    author: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class ReactionResponse(BaseModel):
    id: int
    election_id: int
    author: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=List[ElectionResponse], dependencies=[Depends(cache_lookup)])
async def list_elections(election_service: ElectionService = Depends()):
    return await election_service.list_elections()


@router.get("/upcoming", response_model=List[ElectionResponse], dependencies=[Depends(cache_lookup)])
async def upcoming_elections(election_service: ElectionService = Depends()):
    return await election_service.list_upcoming()


@router.get("/recent", response_model=List[ElectionResponse], dependencies=[Depends(cache_lookup)])
async def recent_elections(election_service: ElectionService = Depends()):
    return await election_service.list_recent()


@router.get("/country/{code}", response_model=List[ElectionResponse], dependencies=[Depends(cache_lookup)])
async def elections_by_country(code: str, election_service: ElectionService = Depends()):
    return await election_service.list_by_country(code)


@router.get("/{election_id}", response_model=ElectionResponse, dependencies=[Depends(cache_lookup)])
async def get_election(election_id: int, election_service: ElectionService = Depends()):
    election = await election_service.get_election(election_id)
    if not election:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Élection introuvable")
    return election


@router.get("/{election_id}/reactions", response_model=List[ReactionResponse], dependencies=[Depends(cache_lookup)])
async def list_reactions(election_id: int, election_service: ElectionService = Depends()):
    return await election_service.list_reactions(election_id)


@router.post("/{election_id}/reactions", response_model=ReactionResponse, status_code=status.HTTP_201_CREATED)
async def create_reaction(election_id: int, body: ReactionRequest, election_service: ElectionService = Depends()):
    if not await election_service.get_election(election_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Élection introuvable")
    reaction = await election_service.create_reaction(election_id, body.author, body.content)
    response_cache.invalidate_prefix(f"/api/elections/{election_id}/reactions", "/api/admin/elections")
    return reaction
