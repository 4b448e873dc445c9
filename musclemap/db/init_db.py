"""
Database initialization.

Creates all tables on the configured engine.
"""

import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from musclemap.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None) -> None:
    """Create every SQLModel table that does not exist yet."""
    # Import all models so SQLModel.metadata has them
    import musclemap.db.base  # noqa: F401

    target = engine or default_engine
    logger.info("Creating database tables on %s", target.url)
    SQLModel.metadata.create_all(target)
    logger.info("Database initialization complete")


if __name__ == "__main__":
    init_db()
