"""
Tests for schema migrations, role seeding and the migration CLI.
"""

import logging

import pytest
from click.testing import CliRunner
from sqlalchemy import inspect, text

from politiquensemble.core.database import create_db_engine
from politiquensemble.core.security import verify_password
from politiquensemble.migrations import (
    MIGRATIONS,
    RoleMigrationError,
    migrate_standard_roles,
    run_migration,
    seed_roles,
)
from politiquensemble.migrations.cli import main
from politiquensemble.models import AdminPermission, CustomRole, RolePermission, User


@pytest.fixture
def legacy_engine():
    """A fresh database shaped like an old deployment."""
    engine = create_db_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, username VARCHAR(100), password VARCHAR(255),"
            " display_name VARCHAR(200), role VARCHAR(20))"
        ))
        conn.execute(text(
            "CREATE TABLE articles (id INTEGER PRIMARY KEY, title VARCHAR(500), slug VARCHAR(500),"
            " content TEXT, excerpt TEXT)"
        ))
        conn.execute(text(
            "CREATE TABLE contact_messages (id INTEGER PRIMARY KEY, name VARCHAR(200), email VARCHAR(255),"
            " subject VARCHAR(500), message TEXT)"
        ))
    yield engine
    engine.dispose()


def columns(engine, table):
    return {col["name"] for col in inspect(engine).get_columns(table)}


class TestSchemaMigrations:

    def test_run_all_then_again_is_noop(self, legacy_engine):
        applied = [change for name in MIGRATIONS for change in run_migration(legacy_engine, name)]
        assert "add column articles.sources" in applied
        assert "add column users.custom_role_id" in applied
        assert "create table political_glossary" in applied
        assert "create table live_events" in applied

        assert [change for name in MIGRATIONS for change in run_migration(legacy_engine, name)] == []

    def test_columns_added(self, legacy_engine):
        run_migration(legacy_engine, "add-sources-to-articles")
        run_migration(legacy_engine, "add-assigned-to-column")
        assert "sources" in columns(legacy_engine, "articles")
        assert "assigned_to" in columns(legacy_engine, "contact_messages")

    def test_alert_url_added_once_table_exists(self, legacy_engine):
        assert run_migration(legacy_engine, "add-url-to-alerts") == []
        run_migration(legacy_engine, "create-site-alerts-table")
        assert "url" in columns(legacy_engine, "site_alerts")

    def test_unknown_migration(self, legacy_engine):
        with pytest.raises(ValueError):
            run_migration(legacy_engine, "drop-everything")


class TestRoleMigrations:

    def test_seed_is_idempotent(self, db):
        first = seed_roles(db)
        assert first["roles"] == 4
        assert seed_roles(db) == {"permissions": 0, "roles": 0, "grants": 0}
        assert db.query(AdminPermission).count() == first["permissions"]

    def test_seed_keeps_manual_grants(self, db):
        seed_roles(db)
        media = db.query(CustomRole).filter_by(name="media_manager").one()
        glossary = db.query(AdminPermission).filter_by(code="glossary").one()
        db.add(RolePermission(role_id=media.id, permission_id=glossary.id))
        db.commit()

        seed_roles(db)
        db.refresh(media)
        assert "glossary" in media.permission_codes

    def test_migrate_standard_roles(self, db, make_user):
        seed_roles(db)
        make_user("chef", role="admin")
        make_user("plume", role="editor")
        make_user("lecteur", role="user")

        assert migrate_standard_roles(db) == 2

        db.expire_all()
        users = {u.username: u for u in db.query(User).all()}
        assert users["chef"].custom_role.name == "administrator"
        assert users["plume"].custom_role.name == "editor"
        assert users["lecteur"].custom_role_id is None
        assert {u.role for u in users.values()} == {"none"}
        assert users["chef"].has_permission("roles")
        assert not users["plume"].has_permission("roles")

    def test_migrate_without_seed_fails(self, db, make_user):
        make_user("chef", role="admin")
        with pytest.raises(RoleMigrationError):
            migrate_standard_roles(db)


class TestCli:

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        yield
        logging.getLogger("politiquensemble").propagate = True

    def test_list(self):
        result = CliRunner().invoke(main, ["list"])
        assert result.exit_code == 0
        assert result.output.split() == list(MIGRATIONS)

    def test_run_requires_names(self):
        result = CliRunner().invoke(main, ["run"])
        assert result.exit_code != 0

    def test_run_unknown_name(self):
        result = CliRunner().invoke(main, ["run", "nope"])
        assert result.exit_code != 0

    def test_run_all_on_current_schema(self):
        result = CliRunner().invoke(main, ["run", "--all"])
        assert result.exit_code == 0
        assert "create-quizzes-table: already up to date" in result.output

    def test_seed_and_create_user(self, db):
        runner = CliRunner()
        assert runner.invoke(main, ["seed-roles"]).exit_code == 0

        result = runner.invoke(main, ["create-user", "fondateur", "Fondateur", "--password", "secret123", "--role", "admin"])
        assert result.exit_code == 0, result.output
        user = db.query(User).filter_by(username="fondateur").one()
        assert verify_password("secret123", user.hashed_password)
        assert user.role == "admin"

        duplicate = runner.invoke(main, ["create-user", "fondateur", "Autre", "--password", "secret123"])
        assert duplicate.exit_code == 1

        result = runner.invoke(main, ["migrate-standard-roles"])
        assert result.exit_code == 0
        assert "1 users assigned a custom role" in result.output

    def test_migrate_standard_roles_without_seed(self):
        result = CliRunner().invoke(main, ["migrate-standard-roles"])
        assert result.exit_code == 1
