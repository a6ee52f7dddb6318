"""
Authentication API endpoints.
Session-cookie login, the current user and permission checks used by the
admin dashboard.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from ..core.logging_config import get_logger
from ..core.security import login_session, logout_session
from ..models.user import User
from ..services.article_service import ArticleService
from ..services.user_service import UserService
from .articles import ArticleResponse
from .deps import get_current_user

logger = get_logger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6)
    display_name: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str
    display_name: str
    role: str
    custom_role_id: Optional[int] = None
    avatar_url: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    is_team_member: bool = False

    class Config:
        from_attributes = True


class PermissionCheckResponse(BaseModel):
    permission: str
    has_permission: bool


class MyPermissionsResponse(BaseModel):
    permissions: List[str]


@router.post("/login", response_model=UserResponse)
async def login(request: Request, body: LoginRequest, user_service: UserService = Depends()):
    """Authenticate with username/password and open a session."""
    user = await user_service.authenticate(body.username, body.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Identifiants incorrects"
        )
    login_session(request, user.id)
    logger.info("User %s logged in", user.username)
    return user


@router.post("/logout")
async def logout(request: Request):
    logout_session(request)
    return {"message": "Déconnexion réussie"}


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: Request, body: RegisterRequest, user_service: UserService = Depends()):
    """Create an editor account and log it in."""
    if await user_service.get_by_username(body.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ce nom d'utilisateur est déjà pris"
        )
    user = await user_service.create_user(
        username=body.username,
        password=body.password,
        display_name=body.display_name,
    )
    login_session(request, user.id)
    return user


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return user


@router.get("/me/permissions", response_model=MyPermissionsResponse)
async def my_permissions(user: User = Depends(get_current_user), user_service: UserService = Depends()):
    codes = await user_service.permission_codes(user)
    return MyPermissionsResponse(permissions=sorted(codes))


@router.get("/permissions/{code}", response_model=PermissionCheckResponse)
async def check_permission(code: str, user: User = Depends(get_current_user), user_service: UserService = Depends()):
    """Whether the current user holds one permission code."""
    granted = await user_service.has_permission(user, code)
    return PermissionCheckResponse(permission=code, has_permission=granted)


@router.get("/my-articles", response_model=List[ArticleResponse])
async def my_articles(user: User = Depends(get_current_user), article_service: ArticleService = Depends()):
    """Articles written by the current user, drafts included."""
    return await article_service.list_by_author(user.id)
