"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from finboard.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks FINBOARD_DB_PATH
            environment variable, then defaults to ~/.finboard/finboard.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FINBOARD_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".finboard"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "finboard.db")

    logger.debug("Opening SQLite database at %s", database_path)
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
