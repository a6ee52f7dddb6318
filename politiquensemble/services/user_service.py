"""
User Service
Authentication, user management and permission lookups.
"""

from typing import List, Optional, Set

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.logging_config import get_logger
from ..core.security import get_password_hash, verify_password
from ..models.user import AdminPermission, User, UserRole, CustomRole

logger = get_logger(__name__)


class UserService:
    """Service for user operations."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, None otherwise."""
        user = await self.get_by_username(username)
        if not user:
            logger.info("Login failed: unknown user %s", username)
            return None
        if not verify_password(password, user.hashed_password):
            logger.info("Login failed: bad password for %s", username)
            return None
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    async def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    async def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    async def list_team_members(self) -> List[User]:
        return self.db.query(User).filter(
            User.is_team_member.is_(True)
        ).order_by(User.display_name).all()

    async def create_user(
        self,
        username: str,
        password: str,
        display_name: str,
        role: str = UserRole.EDITOR.value,
        **kwargs
    ) -> User:
        user = User(
            username=username,
            hashed_password=get_password_hash(password),
            display_name=display_name,
            role=role,
            **kwargs
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s created", username)
        return user

    async def update_user(self, user_id: int, password: Optional[str] = None, **fields) -> Optional[User]:
        user = await self.get_by_id(user_id)
        if not user:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        if password:
            user.hashed_password = get_password_hash(password)
        self.db.commit()
        self.db.refresh(user)
        return user

    async def delete_user(self, user_id: int) -> bool:
        user = await self.get_by_id(user_id)
        if not user:
            return False
        self.db.delete(user)
        self.db.commit()
        return True

    async def role_exists(self, role_id: int) -> bool:
        return self.db.query(CustomRole.id).filter(CustomRole.id == role_id).first() is not None

    async def has_permission(self, user: User, code: str) -> bool:
        return user.has_permission(code)

    async def permission_codes(self, user: User) -> Set[str]:
        """Every permission code the user holds."""
        if user.is_admin:
            return {code for (code,) in self.db.query(AdminPermission.code).all()}
        if user.custom_role is None:
            return set()
        return set(user.custom_role.permission_codes)
