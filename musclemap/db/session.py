"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Generator

from sqlmodel import Session, create_engine

from musclemap.core.config import settings

# SQLite needs cross-thread access for pooled connections.
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    pool_pre_ping=True,   # Verify connections before using
    connect_args=_connect_args,
)


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session bound to the configured engine.

    Example:
        with contextlib.contextmanager(get_db)() as db:
            RecoveryService(db).overview(now)
    """
    with Session(engine) as session:
        yield session
