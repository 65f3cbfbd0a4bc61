import logging

from alembic.config import Config
from alembic import command
from sqlalchemy import inspect

from app.db.session import engine
from app.db.base import Base

logger = logging.getLogger("app")


def init_db(config_path: str = "alembic.ini") -> None:
    """
    Initialize the database by running Alembic migrations.
    """
    try:
        alembic_cfg = Config(config_path)
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations applied successfully")
    except Exception as e:
        logger.error(f"Error applying database migrations: {e}")
        raise


def create_all_tables(bind=None) -> bool:
    """Create any missing table; existing tables are left untouched"""
    bind = bind or engine
    try:
        existing_tables = inspect(bind).get_table_names()

        Base.metadata.create_all(bind=bind)

        new_tables = set(inspect(bind).get_table_names()) - set(existing_tables)
        if new_tables:
            logger.info(f"Created new tables: {new_tables}")

        return True
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        return False
