"""Database initialization utilities."""
from sqlalchemy import inspect

from hostelhub.core.logging import get_logger
from hostelhub.db.base import Base, import_models
from hostelhub.db.session import engine

logger = get_logger(__name__)


def init_db() -> None:
    """
    Create any missing tables.

    Suitable for development and tests. Production schemas are managed
    outside the application.
    """
    import_models()
    existing_tables = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    created = set(Base.metadata.tables) - existing_tables
    if created:
        logger.info(f"Created {len(created)} database tables")
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")


def drop_db() -> None:
    """
    Drop all database tables.

    WARNING: This deletes all data. Development and tests only.
    """
    import_models()
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def reset_db() -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    drop_db()
    init_db()
    logger.info("Database reset complete")
