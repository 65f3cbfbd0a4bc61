"""
Database initialization script.
Creates the forum tables, or applies the Alembic migrations with --migrate.
Run this as: python init_db.py [--migrate]
"""

import argparse
import logging
import sys

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

from app.core.config import settings
from app.db.init_db import create_all_tables, init_db

def main():
    parser = argparse.ArgumentParser(description="Initialize the forum database")
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Apply Alembic migrations instead of creating tables directly"
    )
    args = parser.parse_args()

    logger.info(f"Initializing database at: {settings.DATABASE_URL}")
    if args.migrate:
        init_db()
        return True
    return create_all_tables()

if __name__ == "__main__":
    if main():
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
