"""
=============================================================================
Database Initialization for Result Ledger Records
=============================================================================

Creates SQLite database and tables if they don't exist.

Usage:
    from init_db import init_database
    session = init_database('ledger_records.db')

Date: 2026-10-19
Version: 2.0
=============================================================================
"""

import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from config import Config
from models import Base


logger = logging.getLogger(__name__)


def init_database(db_path: str = Config.DATABASE_PATH) -> Session:
    """
    Initialize database and create tables if they don't exist.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session object
    """
    engine = create_engine(f'sqlite:///{db_path}', echo=False)

    Base.metadata.create_all(engine)

    logger.info(f"Database initialized: {os.path.abspath(db_path)}")
    logger.info(f"Tables: {', '.join(sorted(Base.metadata.tables))}")

    Session = sessionmaker(bind=engine)
    return Session()


def get_database_session(db_path: str = Config.DATABASE_PATH) -> Session:
    """
    Get database session (without recreating tables).

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session object
    """
    engine = create_engine(f'sqlite:///{db_path}', echo=False)
    Session = sessionmaker(bind=engine)
    return Session()


if __name__ == '__main__':
    import sys

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    db_path = sys.argv[1] if len(sys.argv) > 1 else Config.DATABASE_PATH

    print("=" * 70)
    print("Database Initialization")
    print("=" * 70)
    print()

    session = init_database(db_path)
    session.close()

    print()
    print("Database ready for use")
    print()
