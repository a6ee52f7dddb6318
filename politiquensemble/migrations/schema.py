"""
Idempotent DDL migrations.

Each migration returns the list of changes it applied; an empty list means
the schema was already up to date.
"""

from typing import Callable, Dict, List, Type

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from ..core.database import Base
from ..core.logging_config import get_logger
from ..models import (
    AdminPermission,
    Article,
    ContactMessage,
    CustomRole,
    EducationalContent,
    EducationalQuiz,
    EducationalTopic,
    ElectionReaction,
    LiveEvent,
    PoliticalGlossaryTerm,
    RolePermission,
    SiteAlert,
    User,
)

logger = get_logger(__name__)


def create_table_if_missing(engine: Engine, model: Type[Base]) -> List[str]:
    table = model.__table__
    if inspect(engine).has_table(table.name):
        logger.info("Table %s already exists", table.name)
        return []
    table.create(bind=engine)
    logger.info("Table %s created", table.name)
    return [f"create table {table.name}"]


def add_column_if_missing(engine: Engine, model: Type[Base], column_name: str) -> List[str]:
    """
    Add one model column to an existing table.
    The DDL type and foreign key are taken from the model definition.
    """
    table = model.__table__
    inspector = inspect(engine)
    if not inspector.has_table(table.name):
        logger.warning("Table %s is missing, cannot add column %s", table.name, column_name)
        return []
    existing = {col["name"] for col in inspector.get_columns(table.name)}
    if column_name in existing:
        logger.info("Column %s.%s already exists", table.name, column_name)
        return []

    column = table.c[column_name]
    ddl = f"ALTER TABLE {table.name} ADD COLUMN {column.name} {column.type.compile(dialect=engine.dialect)}"
    for fk in column.foreign_keys:
        ddl += f" REFERENCES {fk.column.table.name}({fk.column.name})"
    with engine.begin() as conn:
        conn.execute(text(ddl))
    logger.info("Column %s.%s added", table.name, column_name)
    return [f"add column {table.name}.{column_name}"]


def create_roles_tables(engine: Engine) -> List[str]:
    changes = []
    for model in (AdminPermission, CustomRole, RolePermission):
        changes += create_table_if_missing(engine, model)
    changes += add_column_if_missing(engine, User, "custom_role_id")
    return changes


def create_learning_tables(engine: Engine) -> List[str]:
    return create_table_if_missing(engine, EducationalTopic) + create_table_if_missing(engine, EducationalContent)


def create_quizzes_table(engine: Engine) -> List[str]:
    return create_table_if_missing(engine, EducationalQuiz)


def add_author_to_topics(engine: Engine) -> List[str]:
    return add_column_if_missing(engine, EducationalTopic, "author_id")


def create_glossary_table(engine: Engine) -> List[str]:
    return create_table_if_missing(engine, PoliticalGlossaryTerm)


def create_site_alerts_table(engine: Engine) -> List[str]:
    return create_table_if_missing(engine, SiteAlert)


def add_url_to_alerts(engine: Engine) -> List[str]:
    return add_column_if_missing(engine, SiteAlert, "url")


def add_sources_to_articles(engine: Engine) -> List[str]:
    return add_column_if_missing(engine, Article, "sources")


def add_assigned_to_column(engine: Engine) -> List[str]:
    return add_column_if_missing(engine, ContactMessage, "assigned_to")


def create_election_reactions_table(engine: Engine) -> List[str]:
    return create_table_if_missing(engine, ElectionReaction)


def create_live_events_table(engine: Engine) -> List[str]:
    return create_table_if_missing(engine, LiveEvent)


# Run order matters: later migrations may alter tables created earlier
MIGRATIONS: Dict[str, Callable[[Engine], List[str]]] = {
    "create-roles-tables": create_roles_tables,
    "create-learning-tables": create_learning_tables,
    "create-quizzes-table": create_quizzes_table,
    "add-author-to-topics": add_author_to_topics,
    "create-glossary-table": create_glossary_table,
    "create-site-alerts-table": create_site_alerts_table,
    "add-url-to-alerts": add_url_to_alerts,
    "add-sources-to-articles": add_sources_to_articles,
    "add-assigned-to-column": add_assigned_to_column,
    "create-election-reactions-table": create_election_reactions_table,
    "create-live-events-table": create_live_events_table,
}


def run_migration(engine: Engine, name: str) -> List[str]:
    try:
        migration = MIGRATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown migration: {name}") from None
    logger.info("Running migration %s", name)
    return migration(engine)
