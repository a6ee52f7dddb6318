"""
One-shot schema and data migrations.

Every schema migration inspects the live database before issuing DDL, so
running it again is a no-op.
"""

from .roles import RoleMigrationError, migrate_standard_roles, seed_roles
from .schema import MIGRATIONS, run_migration

__all__ = [
    "MIGRATIONS",
    "RoleMigrationError",
    "migrate_standard_roles",
    "run_migration",
    "seed_roles",
]
