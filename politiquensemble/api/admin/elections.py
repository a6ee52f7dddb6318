"""
Admin endpoints for elections and their reactions.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from pydantic import BaseModel, Field

from ...core.cache import response_cache
from ...services.election_service import ElectionService
from ..deps import admin_router
from ..elections import CandidateResult, ElectionResponse, ReactionRequest, ReactionResponse

router = admin_router("elections")


class ElectionRequest(BaseModel):
    country: str = Field(..., min_length=1, max_length=100)
    country_code: str = Field(..., min_length=2, max_length=10)
    title: str = Field(..., min_length=1, max_length=500)
    date: datetime
    type: str
    results: List[CandidateResult] = []
    description: Optional[str] = None
    upcoming: bool = False


class UpdateElectionRequest(BaseModel):
    country: Optional[str] = None
    country_code: Optional[str] = None
    title: Optional[str] = None
    date: Optional[datetime] = None
    type: Optional[str] = None
    results: Optional[List[CandidateResult]] = None
    description: Optional[str] = None
    upcoming: Optional[bool] = None


def _invalidate():
    response_cache.invalidate_prefix("/api/elections", "/api/admin/elections")


@router.get("", response_model=List[ElectionResponse])
async def list_elections(election_service: ElectionService = Depends()):
    return await election_service.list_elections()


@router.get("/{election_id}", response_model=ElectionResponse)
async def get_election(election_id: int, election_service: ElectionService = Depends()):
    election = await election_service.get_election(election_id)
    if not election:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Élection introuvable")
    return election


@router.post("", response_model=ElectionResponse, status_code=status.HTTP_201_CREATED)
async def create_election(body: ElectionRequest, election_service: ElectionService = Depends()):
    election = await election_service.create_election(**body.model_dump())
    _invalidate()
    return election


@router.put("/{election_id}", response_model=ElectionResponse)
async def update_election(election_id: int, body: UpdateElectionRequest, election_service: ElectionService = Depends()):
    election = await election_service.update_election(election_id, **body.model_dump(exclude_unset=True))
    if not election:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Élection introuvable")
    _invalidate()
    return election


@router.delete("/{election_id}")
async def delete_election(election_id: int, election_service: ElectionService = Depends()):
    """Delete an election with its reactions."""
    if not await election_service.delete_election(election_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Élection introuvable")
    _invalidate()
    return {"message": "Élection supprimée"}


@router.get("/{election_id}/reactions", response_model=List[ReactionResponse])
async def list_reactions(election_id: int, election_service: ElectionService = Depends()):
    return await election_service.list_reactions(election_id)


@router.post("/{election_id}/reactions", response_model=ReactionResponse, status_code=status.HTTP_201_CREATED)
async def create_reaction(election_id: int, body: ReactionRequest, election_service: ElectionService = Depends()):
    if not await election_service.get_election(election_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Élection introuvable")
    reaction = await election_service.create_reaction(election_id, body.author, body.content)
    _invalidate()
    return reaction


@router.delete("/{election_id}/reactions/{reaction_id}")
async def delete_reaction(election_id: int, reaction_id: int, election_service: ElectionService = Depends()):
    if not await election_service.delete_reaction(election_id, reaction_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Réaction introuvable")
    _invalidate()
    return {"message": "Réaction supprimée"}
