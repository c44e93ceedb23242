"""Database configuration and session management."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


class Database:
    """Owns the engine and session factory for one database.

    Built once at startup and handed to the app; request handlers get
    sessions through `get_db`.
    """

    def __init__(self, url: str, **engine_kwargs):
        if not url:
            raise ValueError("DATABASE_URL not configured")
        if not url.startswith("sqlite"):
            engine_kwargs.setdefault("pool_pre_ping", True)  # Test connections before use
            engine_kwargs.setdefault("pool_recycle", 300)  # Recycle connections after 5 minutes
        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self):
        """Create tables that do not exist yet."""
        from jobboard.db import tables  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
