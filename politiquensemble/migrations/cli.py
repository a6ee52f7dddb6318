"""Command line entry point for database migrations."""

import asyncio
import sys
from typing import Optional, Tuple

import click
from sqlalchemy.orm import sessionmaker

from ..core import database
from ..core.logging_config import setup_logging
from ..models.user import UserRole
from ..services.user_service import UserService
from .roles import RoleMigrationError, migrate_standard_roles, seed_roles
from .schema import MIGRATIONS, run_migration


@click.group()
@click.option("--database-url", envvar="DATABASE_URL", default=None, help="Override the configured database")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v, -vv)")
@click.pass_context
def main(ctx: click.Context, database_url: Optional[str], verbose: int) -> None:
    """Politiquensemble database migrations."""
    setup_logging(log_level="DEBUG" if verbose >= 2 else "INFO" if verbose else "WARNING", log_format="simple")
    if database_url and database_url != str(database.engine.url):
        engine = database.create_db_engine(database_url)
    else:
        engine = database.engine
    ctx.obj = {"engine": engine, "session_factory": sessionmaker(bind=engine, expire_on_commit=False)}


@main.command("list")
def list_migrations() -> None:
    """List known schema migrations, in run order."""
    for name in MIGRATIONS:
        click.echo(name)


@main.command("run")
@click.argument("names", nargs=-1)
@click.option("--all", "run_all", is_flag=True, help="Run every migration in order")
@click.pass_obj
def run(obj: dict, names: Tuple[str, ...], run_all: bool) -> None:
    """Run schema migrations by name."""
    if run_all:
        names = tuple(MIGRATIONS)
    if not names:
        raise click.UsageError("Give at least one migration name or --all")
    unknown = [name for name in names if name not in MIGRATIONS]
    if unknown:
        raise click.BadParameter(", ".join(unknown), param_hint="NAMES")

    for name in names:
        changes = run_migration(obj["engine"], name)
        if changes:
            for change in changes:
                click.echo(f"{name}: {change}")
        else:
            click.echo(f"{name}: already up to date")


@main.command("init-db")
@click.pass_obj
def init_db(obj: dict) -> None:
    """Create every missing table from the models."""
    from .. import models  # noqa: F401

    database.Base.metadata.create_all(bind=obj["engine"])
    click.echo("Tables created")


@main.command("seed-roles")
@click.pass_obj
def seed_roles_command(obj: dict) -> None:
    """Insert or refresh the default permissions and roles."""
    with obj["session_factory"]() as db:
        created = seed_roles(db)
    click.echo(
        f"{created['permissions']} permissions, {created['roles']} roles, {created['grants']} grants added"
    )


@main.command("migrate-standard-roles")
@click.pass_obj
def migrate_standard_roles_command(obj: dict) -> None:
    """Move users from legacy roles to custom roles."""
    with obj["session_factory"]() as db:
        try:
            assigned = migrate_standard_roles(db)
        except RoleMigrationError as e:
            click.echo(str(e), err=True)
            sys.exit(1)
    click.echo(f"{assigned} users assigned a custom role")


@main.command("create-user")
@click.argument("username")
@click.argument("display_name")
@click.password_option()
@click.option(
    "--role",
    type=click.Choice([UserRole.ADMIN.value, UserRole.EDITOR.value, UserRole.USER.value]),
    default=UserRole.EDITOR.value,
    show_default=True,
)
@click.pass_obj
def create_user(obj: dict, username: str, display_name: str, password: str, role: str) -> None:
    """Create a user, for instance the first administrator."""
    with obj["session_factory"]() as db:
        user_service = UserService(db)
        if asyncio.run(user_service.get_by_username(username)):
            click.echo(f'Un utilisateur "{username}" existe déjà.', err=True)
            sys.exit(1)
        user = asyncio.run(user_service.create_user(
            username=username, password=password, display_name=display_name, role=role
        ))
    click.echo(f'Utilisateur "{user.username}" créé (id={user.id}, rôle={user.role}).')


if __name__ == "__main__":
    main()
