"""
SQLAlchemy engine, session factory and declarative base for SelfPress.
Provides a dependency function to open and close database sessions safely.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from selfpress.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """
    Provides a database session for FastAPI dependencies.

    Yields:
        Session: SQLAlchemy session.

    Ensures:
        The session is closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    """Creates every table registered on Base."""
    from selfpress import models  # noqa: F401  registers the mappers
    Base.metadata.create_all(bind=engine)
