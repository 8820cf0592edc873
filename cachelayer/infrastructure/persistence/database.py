"""Persistence: engine, session factory, and Base for SQLAlchemy ORM models.

The engine is created from settings.database_url on demand so importing
the package never touches the database or triggers Settings validation.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from cachelayer.core.config import Settings, get_settings
from cachelayer.domain.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for ORM models that back cached entries."""


def create_session_factory(settings: Settings | None = None) -> sessionmaker[Session]:
    """Create an engine from settings and return a session factory bound to it.

    Raises:
        DatabaseError: If CACHELAYER_DATABASE_URL is not set.
    """
    settings = settings or get_settings()
    if not settings.database_url:
        raise DatabaseError(
            "CACHELAYER_DATABASE_URL is required to create a database session factory."
        )
    engine = create_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )
    logger.info("Database engine created: %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )
