"""
Admin endpoints for users, custom roles and permissions.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from pydantic import BaseModel, Field

from ...core.cache import response_cache
from ...models.user import User, UserRole
from ...services.role_service import RoleService, SystemRoleError
from ...services.user_service import UserService
from ..auth import UserResponse
from ..deps import admin_router, get_current_user

users_router = admin_router("users")
roles_router = admin_router("roles")


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6)
    display_name: str = Field(..., min_length=1)
    role: UserRole = UserRole.EDITOR
    custom_role_id: Optional[int] = None
    avatar_url: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    is_team_member: bool = False


class UpdateUserRequest(BaseModel):
    display_name: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None
    custom_role_id: Optional[int] = None
    avatar_url: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    is_team_member: Optional[bool] = None


class PermissionResponse(BaseModel):
    id: int
    code: str
    display_name: str
    description: Optional[str]
    icon: Optional[str]
    category: Optional[str]

    class Config:
        from_attributes = True


class RoleResponse(BaseModel):
    id: int
    name: str
    display_name: str
    description: Optional[str]
    color: Optional[str]
    is_system: bool
    priority: int
    created_at: datetime
    permissions: List[PermissionResponse] = []

    class Config:
        from_attributes = True


class RoleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, pattern="^[a-z0-9_]+$")
    display_name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    color: str = "#6366f1"
    priority: int = 0
    permission_ids: List[int] = []


class UpdateRoleRequest(BaseModel):
    display_name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    priority: Optional[int] = None
    permission_ids: Optional[List[int]] = None


def _invalidate_users():
    response_cache.invalidate_prefix("/api/admin/users", "/api/team")


# ============ Users ============

@users_router.get("", response_model=List[UserResponse])
async def list_users(user_service: UserService = Depends()):
    return await user_service.list_users()


@users_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, user_service: UserService = Depends()):
    user = await user_service.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur introuvable")
    return user


@users_router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(body: CreateUserRequest, user_service: UserService = Depends()):
    if await user_service.get_by_username(body.username):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ce nom d'utilisateur est déjà pris")
    if body.custom_role_id is not None and not await user_service.role_exists(body.custom_role_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Rôle inconnu")
    fields = body.model_dump()
    fields["role"] = body.role.value
    user = await user_service.create_user(**fields)
    _invalidate_users()
    return user


@users_router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, body: UpdateUserRequest, user_service: UserService = Depends()):
    fields = body.model_dump(exclude_unset=True)
    if fields.get("custom_role_id") is not None and not await user_service.role_exists(fields["custom_role_id"]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Rôle inconnu")
    if fields.get("role") is not None:
        fields["role"] = body.role.value
    user = await user_service.update_user(user_id, **fields)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur introuvable")
    _invalidate_users()
    return user


@users_router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends()
):
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Impossible de supprimer votre propre compte")
    if not await user_service.delete_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur introuvable")
    _invalidate_users()
    return {"message": "Utilisateur supprimé"}


# ============ Roles ============

@roles_router.get("", response_model=List[RoleResponse])
async def list_roles(role_service: RoleService = Depends()):
    return await role_service.list_roles()


@roles_router.get("/permissions/all", response_model=List[PermissionResponse])
async def list_permissions(role_service: RoleService = Depends()):
    """Every permission code a role can be granted."""
    return await role_service.list_permissions()


@roles_router.get("/{role_id}", response_model=RoleResponse)
async def get_role(role_id: int, role_service: RoleService = Depends()):
    role = await role_service.get_role(role_id)
    if not role:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rôle introuvable")
    return role


@roles_router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(body: RoleRequest, role_service: RoleService = Depends()):
    if await role_service.get_role_by_name(body.name):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Un rôle porte déjà ce nom")
    role = await role_service.create_role(**body.model_dump())
    response_cache.invalidate_prefix("/api/admin/roles")
    return role


@roles_router.put("/{role_id}", response_model=RoleResponse)
async def update_role(role_id: int, body: UpdateRoleRequest, role_service: RoleService = Depends()):
    """Update a role; ``permission_ids`` replaces the grants when present."""
    role = await role_service.update_role(role_id, **body.model_dump(exclude_unset=True))
    if not role:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rôle introuvable")
    response_cache.invalidate_prefix("/api/admin/roles")
    return role


@roles_router.delete("/{role_id}")
async def delete_role(role_id: int, role_service: RoleService = Depends()):
    try:
        deleted = await role_service.delete_role(role_id)
    except SystemRoleError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Les rôles système ne peuvent pas être supprimés")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rôle introuvable")
    response_cache.invalidate_prefix("/api/admin/roles", "/api/admin/users")
    return {"message": "Rôle supprimé"}
