"""
database.py — Data store client and per-request session dependency

Business Rules:
- One Database per process, built at startup and disposed on shutdown
- Startup connection failures are logged, never fatal (degraded mode)
- Each request gets its own Session, closed after the response

Called by: main.py (lifespan), routers/*.py (get_db)
Depends on: config.py (database_url, db_echo), models (Base)
"""

from collections.abc import Iterator

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from .config import Settings
from .models import Base


class Database:
    """Owns the SQLAlchemy engine and session factory."""

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        kwargs = {"echo": settings.db_echo}
        if not settings.database_url.startswith("sqlite"):
            kwargs.update(pool_pre_ping=True, pool_recycle=3600)
        return cls(settings.database_url, **kwargs)

    def connect(self) -> None:
        """Authenticate against the server, then create any missing tables."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def connect_db(database: Database) -> bool:
    """Connect and sync the schema. Returns False (and logs) on failure."""
    try:
        database.connect()
    except Exception as e:
        logger.error("Database connection failed: {}", e)
        return False
    logger.info("Database connected, schema in sync")
    return True


def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.database.session()
