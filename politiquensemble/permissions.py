"""
Permission codes and the admin route table.

Every admin page is gated by one permission code. The table below maps the
dashboard paths to those codes; pages missing from the table require the
generic ``admin`` code, which only administrators hold.
"""

from typing import Dict, List, Optional

ADMIN_PERMISSION = "admin"
DASHBOARD_PERMISSION = "dashboard"

ADMIN_ROOT = "/admin"

ROUTE_PERMISSIONS: Dict[str, str] = {
    "/admin": DASHBOARD_PERMISSION,
    "/admin/articles": "articles",
    "/admin/categories": "categories",
    "/admin/flash-infos": "flash_infos",
    "/admin/videos": "videos",
    "/admin/directs": "live_coverage",
    "/admin/users": "users",
    "/admin/team": "users",
    "/admin/roles": "roles",
    "/admin/applications": "applications",
    "/admin/messages": "messages",
    "/admin/newsletter": "newsletter",
    "/admin/contenu-educatif": "educational_content",
    "/admin/sujets-educatifs": "educational_topics",
    "/admin/elections": "elections",
    "/admin/glossaire": "glossary",
    "/admin/alertes": "site_alerts",
}


def permission_for_route(path: str) -> str:
    """
    Return the permission code guarding an admin path.

    Exact entries win; otherwise the longest entry the path is nested under
    (``/admin/articles/12/edit`` -> ``articles``). The ``/admin`` root only
    matches itself. Anything else falls back to ``admin``.
    """
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")

    code = ROUTE_PERMISSIONS.get(path)
    if code is not None:
        return code

    best: Optional[str] = None
    for route in ROUTE_PERMISSIONS:
        if route == ADMIN_ROOT:
            continue
        if path.startswith(route + "/") and (best is None or len(route) > len(best)):
            best = route
    return ROUTE_PERMISSIONS[best] if best else ADMIN_PERMISSION


# Seed data for the roles system, applied by ``politiquensemble-migrate seed-roles``
DEFAULT_PERMISSIONS: List[dict] = [
    {"code": "admin", "display_name": "Administration", "description": "Accès complet à l'administration", "icon": "Shield", "category": "system"},
    {"code": "dashboard", "display_name": "Tableau de bord", "description": "Accès au tableau de bord admin", "icon": "LayoutDashboard", "category": "general"},
    {"code": "articles", "display_name": "Articles", "description": "Gestion des articles", "icon": "FileText", "category": "content"},
    {"code": "flash_infos", "display_name": "Flash Infos", "description": "Gestion des flash infos", "icon": "AlertTriangle", "category": "content"},
    {"code": "videos", "display_name": "Vidéos", "description": "Gestion des vidéos", "icon": "Video", "category": "content"},
    {"code": "categories", "display_name": "Catégories", "description": "Gestion des catégories", "icon": "TagsIcon", "category": "content"},
    {"code": "educational_topics", "display_name": "Sujets éducatifs", "description": "Gestion des sujets éducatifs", "icon": "GraduationCap", "category": "content"},
    {"code": "educational_content", "display_name": "Contenu éducatif", "description": "Gestion du contenu éducatif", "icon": "Book", "category": "content"},
    {"code": "live_coverage", "display_name": "Suivi en direct", "description": "Gestion des suivis en direct", "icon": "Radio", "category": "content"},
    {"code": "elections", "display_name": "Élections", "description": "Gestion des élections et réactions", "icon": "Vote", "category": "content"},
    {"code": "glossary", "display_name": "Glossaire", "description": "Gestion du glossaire politique", "icon": "BookA", "category": "content"},
    {"code": "site_alerts", "display_name": "Alertes", "description": "Gestion des bandeaux d'alerte", "icon": "Megaphone", "category": "content"},
    {"code": "users", "display_name": "Utilisateurs", "description": "Gestion des utilisateurs", "icon": "Users", "category": "system"},
    {"code": "roles", "display_name": "Rôles", "description": "Gestion des rôles et permissions", "icon": "ShieldCheck", "category": "system"},
    {"code": "applications", "display_name": "Candidatures", "description": "Gestion des candidatures", "icon": "FileCheck", "category": "system"},
    {"code": "messages", "display_name": "Messages", "description": "Gestion des messages de contact", "icon": "MessageSquare", "category": "communication"},
    {"code": "newsletter", "display_name": "Newsletter", "description": "Gestion des abonnés à la newsletter", "icon": "Mail", "category": "communication"},
]

DEFAULT_ROLES: List[dict] = [
    {"name": "administrator", "display_name": "Administrateur", "description": "Accès complet à toutes les fonctionnalités", "color": "#EF4444", "is_system": True, "priority": 100},
    {"name": "editor", "display_name": "Éditeur", "description": "Accès à la gestion du contenu", "color": "#3B82F6", "is_system": True, "priority": 50},
    {"name": "content_manager", "display_name": "Gestionnaire de contenu", "description": "Peut gérer uniquement les articles et flash infos", "color": "#10B981", "is_system": False, "priority": 30},
    {"name": "media_manager", "display_name": "Gestionnaire de médias", "description": "Peut gérer uniquement les vidéos", "color": "#8B5CF6", "is_system": False, "priority": 20},
]


def default_grants(role_name: str) -> List[str]:
    """Permission codes granted to a default role when seeding."""
    if role_name == "administrator":
        return [p["code"] for p in DEFAULT_PERMISSIONS]
    if role_name == "editor":
        return [p["code"] for p in DEFAULT_PERMISSIONS if p["category"] in ("content", "general")]
    if role_name == "content_manager":
        return ["dashboard", "articles", "flash_infos", "categories"]
    if role_name == "media_manager":
        return ["dashboard", "videos"]
    return []
