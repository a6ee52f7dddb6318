"""
Shared API dependencies: current user resolution and permission gates.
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..core.cache import CachedRoute, cache_lookup
from ..core.security import logout_session, session_user_id
from ..models.user import User
from ..services.user_service import UserService


async def get_optional_user(request: Request, user_service: UserService = Depends()) -> Optional[User]:
    """User attached to the session cookie, or None."""
    user_id = session_user_id(request)
    if user_id is None:
        return None
    user = await user_service.get_by_id(user_id)
    if user is None:
        # Account deleted while the session was still alive
        logout_session(request)
    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Non autorisé")
    return user


def require_permission(code: str) -> Callable:
    """
    Build a dependency that only lets through users holding ``code``.
    Anonymous callers get a 401, authenticated ones without the grant a 403.
    """
    async def permission_checker(user: User = Depends(get_current_user)) -> User:
        if not user.has_permission(code):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Accès refusé")
        return user

    return permission_checker


def admin_router(code: str) -> APIRouter:
    """Router for an admin resource: permission gate first, then the response cache."""
    return APIRouter(
        route_class=CachedRoute,
        dependencies=[Depends(require_permission(code)), Depends(cache_lookup)],
    )
