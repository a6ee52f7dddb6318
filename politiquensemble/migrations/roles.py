"""
Data migrations for the roles system.
"""

from typing import Dict

from sqlalchemy.orm import Session

from ..core.logging_config import get_logger
from ..models.user import AdminPermission, CustomRole, RolePermission, User, UserRole
from ..permissions import DEFAULT_PERMISSIONS, DEFAULT_ROLES, default_grants

logger = get_logger(__name__)

LEGACY_ROLE_NAMES = {
    UserRole.ADMIN.value: ("administrator",),
    UserRole.EDITOR.value: ("editor", "editeur"),
    UserRole.USER.value: ("user", "utilisateur"),
}


class RoleMigrationError(Exception):
    """The database is not in a state the migration can work from."""


def seed_roles(db: Session) -> Dict[str, int]:
    """
    Upsert the default permissions and roles, then add their missing grants.
    Grants added by hand are left alone.
    """
    created = {"permissions": 0, "roles": 0, "grants": 0}

    permissions: Dict[str, AdminPermission] = {}
    for entry in DEFAULT_PERMISSIONS:
        permission = db.query(AdminPermission).filter(AdminPermission.code == entry["code"]).first()
        if permission is None:
            permission = AdminPermission(**entry)
            db.add(permission)
            created["permissions"] += 1
        else:
            for key, value in entry.items():
                setattr(permission, key, value)
        permissions[entry["code"]] = permission
    db.flush()

    for entry in DEFAULT_ROLES:
        role = db.query(CustomRole).filter(CustomRole.name == entry["name"]).first()
        if role is None:
            role = CustomRole(**entry)
            db.add(role)
            db.flush()
            created["roles"] += 1

        granted = {grant.permission_id for grant in role.grants}
        for code in default_grants(entry["name"]):
            permission_id = permissions[code].id
            if permission_id not in granted:
                role.grants.append(RolePermission(permission_id=permission_id))
                created["grants"] += 1

    db.commit()
    logger.info(
        "Roles seeded: %d permissions, %d roles, %d grants added",
        created["permissions"], created["roles"], created["grants"],
    )
    return created


def migrate_standard_roles(db: Session) -> int:
    """
    Move users from the legacy ``role`` column to custom roles.

    Users without a custom role get the one matching their legacy role.
    Legacy admins and editors with no matching role fall back to
    ``administrator``. Other users without a matching role keep no custom
    role, so they lose dashboard access.
    Finally every legacy role is set to ``none``. Returns the number of
    users that received a custom role.
    """
    roles = {role.name: role for role in db.query(CustomRole).all()}
    administrator = roles.get("administrator")
    if administrator is None:
        raise RoleMigrationError("Le rôle administrateur n'a pas été trouvé, lancez seed-roles d'abord")

    def find_role(legacy: str):
        for name in LEGACY_ROLE_NAMES.get(legacy, ()):
            if name in roles:
                return roles[name]
        return None

    user_role = find_role(UserRole.USER.value)
    assigned = 0
    for user in db.query(User).order_by(User.id).all():
        if user.custom_role_id is not None:
            continue
        role = find_role(user.role)
        if role is None:
            if user.role in (UserRole.ADMIN.value, UserRole.EDITOR.value):
                role = administrator
            elif user_role is not None:
                role = user_role
            else:
                logger.warning("User %s left without a custom role", user.username)
                continue
        user.custom_role_id = role.id
        assigned += 1
        logger.info("User %s moved to role %s", user.username, role.name)

    db.flush()
    db.query(User).update({"role": UserRole.NONE.value}, synchronize_session=False)
    db.commit()
    return assigned
