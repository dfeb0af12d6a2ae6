"""
Database Configuration and Setup
SQLAlchemy engine, session factory and declarative base for the Store Rating Backend
"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storerate.config import DATABASE_URL, SQL_ECHO, is_sqlite

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Driver-specific engine arguments"""
    if not is_sqlite(url):
        return {"pool_pre_ping": True}  # Enable connection health checks

    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        options["poolclass"] = StaticPool
    return options


# Create SQLAlchemy engine
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, **_engine_options(DATABASE_URL))

# Create SessionLocal class for database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for SQLAlchemy models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session
    Yields a database session and ensures it's closed after use

    Usage in FastAPI:
        @router.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            # Use db here
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database - create all tables
    This is called on application startup
    """
    import storerate.models  # noqa: F401  (registers the models on Base)

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database tables ready ({engine.url.get_backend_name()})")


def drop_db():
    """Drop all tables (used by the seed script and tests)"""
    import storerate.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
