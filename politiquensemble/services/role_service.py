"""
Role Service
Custom roles and their permission grants.
"""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.logging_config import get_logger
from ..models.user import AdminPermission, CustomRole, RolePermission

logger = get_logger(__name__)


class SystemRoleError(Exception):
    """Raised when trying to delete a system role."""


class RoleService:
    """Service for custom roles and permissions."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    async def list_roles(self) -> List[CustomRole]:
        """Roles by priority, most important first."""
        return self.db.query(CustomRole).order_by(CustomRole.priority.desc(), CustomRole.id).all()

    async def get_role(self, role_id: int) -> Optional[CustomRole]:
        return self.db.query(CustomRole).filter(CustomRole.id == role_id).first()

    async def get_role_by_name(self, name: str) -> Optional[CustomRole]:
        return self.db.query(CustomRole).filter(CustomRole.name == name).first()

    async def list_permissions(self) -> List[AdminPermission]:
        return self.db.query(AdminPermission).order_by(AdminPermission.category, AdminPermission.code).all()

    async def create_role(self, name: str, display_name: str, permission_ids: Optional[List[int]] = None, **kwargs) -> CustomRole:
        role = CustomRole(name=name, display_name=display_name, **kwargs)
        self.db.add(role)
        self.db.flush()
        self._set_grants(role, permission_ids or [])
        self.db.commit()
        self.db.refresh(role)
        logger.info("Role %s created with %d permissions", name, len(role.grants))
        return role

    async def update_role(self, role_id: int, permission_ids: Optional[List[int]] = None, **fields) -> Optional[CustomRole]:
        """
        Update a role. ``permission_ids`` replaces the whole grant list when
        given; None leaves the grants untouched.
        """
        role = await self.get_role(role_id)
        if not role:
            return None
        for key, value in fields.items():
            setattr(role, key, value)
        if permission_ids is not None:
            role.grants.clear()
            self.db.flush()
            self._set_grants(role, permission_ids)
        self.db.commit()
        self.db.refresh(role)
        return role

    async def delete_role(self, role_id: int) -> bool:
        role = await self.get_role(role_id)
        if not role:
            return False
        if role.is_system:
            raise SystemRoleError(role.name)
        for user in role.users:
            user.custom_role_id = None
        self.db.delete(role)
        self.db.commit()
        logger.info("Role %s deleted", role.name)
        return True

    def _set_grants(self, role: CustomRole, permission_ids: List[int]):
        known = {
            pid for (pid,) in self.db.query(AdminPermission.id).filter(
                AdminPermission.id.in_(permission_ids)
            ).all()
        } if permission_ids else set()
        for permission_id in dict.fromkeys(permission_ids):
            if permission_id in known:
                role.grants.append(RolePermission(permission_id=permission_id))
