"""Persistence: SQLAlchemy database adapter and SQL template rendering."""

from cachelayer.infrastructure.persistence.database import Base, create_session_factory
from cachelayer.infrastructure.persistence.sql_builder import (
    generate_count_sql,
    generate_sql,
)
from cachelayer.infrastructure.persistence.sqlalchemy_database import SqlAlchemyDatabase

__all__ = [
    "Base",
    "SqlAlchemyDatabase",
    "create_session_factory",
    "generate_count_sql",
    "generate_sql",
]
