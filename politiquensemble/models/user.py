"""
User, role and permission models.
"""

from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base


class UserRole(str, Enum):
    """Legacy roles, superseded by custom roles."""
    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"
    NONE = "none"  # Set once a user has been moved to custom roles


class AdminPermission(Base):
    """A capability code gating part of the admin dashboard (e.g. "articles")."""
    __tablename__ = "admin_permissions"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(100), unique=True, nullable=False, index=True)
    display_name = Column(String(200), nullable=False)
    description = Column(Text, default="")
    icon = Column(String(100), default="FileText")  # Lucide icon name
    category = Column(String(50), default="content")  # general, content, system, communication
    created_at = Column(DateTime, default=datetime.utcnow)


class CustomRole(Base):
    """Named bundle of permissions assigned to users."""
    __tablename__ = "custom_roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    display_name = Column(String(200), nullable=False)
    description = Column(Text, default="")
    color = Column(String(20), default="#6366f1")
    is_system = Column(Boolean, default=False)  # System roles cannot be deleted
    priority = Column(Integer, default=0)  # Higher = more important
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    grants = relationship("RolePermission", back_populates="role", cascade="all, delete-orphan")
    users = relationship("User", back_populates="custom_role")

    @property
    def permissions(self):
        return [grant.permission for grant in self.grants]

    @property
    def permission_codes(self):
        return {grant.permission.code for grant in self.grants}


class RolePermission(Base):
    __tablename__ = "role_permissions"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("custom_roles.id", ondelete="CASCADE"), nullable=False, index=True)
    permission_id = Column(Integer, ForeignKey("admin_permissions.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    role = relationship("CustomRole", back_populates="grants")
    permission = relationship("AdminPermission")


class User(Base):
    """
    Back-office user: journalists, editors and administrators.
    Team members are also shown on the public team page.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column("password", String(255), nullable=False)
    display_name = Column(String(200), nullable=False)

    # Role and permissions
    role = Column(String(20), nullable=False, default=UserRole.EDITOR.value)
    custom_role_id = Column(Integer, ForeignKey("custom_roles.id"), nullable=True)

    # Profile
    avatar_url = Column(String(500), nullable=True)
    title = Column(String(200), nullable=True)  # Grade (journaliste politique, éditeur...)
    bio = Column(Text, nullable=True)
    is_team_member = Column(Boolean, default=False)

    custom_role = relationship("CustomRole", back_populates="users")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def has_permission(self, code: str) -> bool:
        """Legacy admins hold every permission; others need a grant on their custom role."""
        if self.is_admin:
            return True
        if self.custom_role is None:
            return False
        return code in self.custom_role.permission_codes
