"""Pytest configuration and fixtures for cachelayer.

Settings are re-read for every test (get_settings.cache_clear) with all
CACHELAYER_* variables removed, so tests see library defaults unless they
set variables themselves via monkeypatch.
"""

import dataclasses
import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from sqlalchemy import Integer, String, create_engine
from sqlalchemy.orm import Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from cachelayer.core.config import get_settings
from cachelayer.infrastructure.cache.keys import DEFAULT_KEY_SCHEME, KeyScheme
from cachelayer.infrastructure.cache.memory_cache import MemoryCache
from cachelayer.infrastructure.persistence.database import Base


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop CACHELAYER_* env vars and the cached Settings around each test."""
    for name in list(os.environ):
        if name.upper().startswith("CACHELAYER_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class MemoryDatabase:
    """IDatabase double: finds records of the entry's type with the same cache key."""

    def __init__(self, *records: Any, key_scheme: KeyScheme = DEFAULT_KEY_SCHEME) -> None:
        self.records = list(records)
        self.key_scheme = key_scheme
        self.calls = 0

    def get_entry(self, entry: Any) -> bool:
        self.calls += 1
        wanted = self.key_scheme.key_for(entry)
        for record in self.records:
            if type(record) is type(entry) and self.key_scheme.key_for(record) == wanted:
                for f in dataclasses.fields(record):
                    setattr(entry, f.name, getattr(record, f.name))
                return True
        return False


@pytest.fixture
def memory_cache() -> MemoryCache:
    """Empty in-process cache."""
    return MemoryCache()


@pytest.fixture
def memory_database() -> Callable[..., MemoryDatabase]:
    """Factory for a MemoryDatabase preloaded with records."""
    return MemoryDatabase


@pytest.fixture
def session_factory() -> Iterator[sessionmaker[Session]]:
    """Session factory over a fresh in-memory SQLite database with all Base tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    Base.metadata.drop_all(engine)
    engine.dispose()


class RelationRow(Base):
    """ORM rows behind the MockEntry test entries."""

    __tablename__ = "public_relation"

    relate_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    source_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), default="")


@pytest.fixture
def relation_model() -> type[RelationRow]:
    return RelationRow


@pytest.fixture
def seeded_session_factory(
    session_factory: sessionmaker[Session],
) -> sessionmaker[Session]:
    """Session factory whose database holds relations (1,2,3) and (1,2,4)."""
    with session_factory() as session:
        session.add_all(
            [
                RelationRow(relate_id=1, source_id=2, property_id=3, name="first"),
                RelationRow(relate_id=1, source_id=2, property_id=4, name="second"),
            ]
        )
        session.commit()
    return session_factory
