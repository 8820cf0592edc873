"""SQLAlchemy-backed IDatabase.

Entries stay plain dataclasses or pydantic models; each entry type is
mapped to the ORM model holding its rows. Column values are copied onto
the entry by attribute name, so entry fields and model columns must share
names for the columns that should be populated.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from cachelayer.domain.exceptions import DatabaseError
from cachelayer.infrastructure.cache.keys import DEFAULT_KEY_SCHEME, KeyScheme
from cachelayer.infrastructure.persistence.sql_builder import (
    generate_count_sql,
    generate_sql,
)

logger = logging.getLogger(__name__)


def _entry_field_names(entry_type: type) -> set[str]:
    if dataclasses.is_dataclass(entry_type):
        return {f.name for f in dataclasses.fields(entry_type)}
    model_fields = getattr(entry_type, "model_fields", None)
    if model_fields is not None:
        return set(model_fields)
    raise DatabaseError(
        f"Cannot build {entry_type.__name__} from rows: not a dataclass or pydantic model",
        entry_type.__name__,
    )


class SqlAlchemyDatabase:
    """IDatabase that loads entries through SQLAlchemy sessions."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        models: Mapping[type, type[Any]],
        key_scheme: KeyScheme = DEFAULT_KEY_SCHEME,
    ) -> None:
        """Initialize the adapter.

        Args:
            session_factory: Factory for short-lived sessions (one per call).
            models: Entry type -> ORM model class holding its rows.
            key_scheme: Scheme used to resolve identity fields (only its tag name matters here).
        """
        self.session_factory = session_factory
        self.models = dict(models)
        self.key_scheme = key_scheme

    def _model_for(self, entry_type: type) -> type[Any]:
        model = self.models.get(entry_type)
        if model is None:
            raise DatabaseError(
                f"No ORM model registered for {entry_type.__name__}",
                entry_type.__name__,
            )
        return model

    def get_entry(self, entry: Any) -> bool:
        """Load the row matching entry's identity fields and copy its columns onto entry.

        Raises:
            DatabaseError: If the entry type is unmapped or the query fails.
            NoIdentityFieldError: If entry exposes no identity field.
        """
        entry_type = type(entry)
        model = self._model_for(entry_type)
        criteria = {
            field.attribute: field.value
            for field in self.key_scheme.identity_fields(entry)
        }
        stmt = select(model).filter_by(**criteria).limit(1)
        try:
            with self.session_factory() as session:
                row = session.execute(stmt).scalar_one_or_none()
                if row is None:
                    return False
                values = {
                    attr.key: getattr(row, attr.key)
                    for attr in sa_inspect(model).column_attrs
                }
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to load {entry_type.__name__}: {e}", entry_type.__name__
            ) from e
        for name, value in values.items():
            if hasattr(entry, name):
                setattr(entry, name, value)
        return True

    def get_entries(self, entry_type: type, sql: str, *args: Any) -> list[Any]:
        """Run a ``?``-templated query and build one entry per result row.

        Columns without a matching entry field are ignored. Feed the result
        to CacheHandler.store_batch to warm the cache.
        """
        query = generate_sql(sql, *args)
        names = _entry_field_names(entry_type)
        logger.debug("Loading %s: %s", entry_type.__name__, query)
        try:
            with self.session_factory() as session:
                rows = session.connection().exec_driver_sql(query).mappings().all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to load {entry_type.__name__} list: {e}", entry_type.__name__
            ) from e
        return [
            entry_type(**{key: value for key, value in row.items() if key in names})
            for row in rows
        ]

    def count_entries(self, sql: str, *args: Any) -> int:
        """Count rows a ``?``-templated query would return, ignoring its LIMIT clause."""
        query = generate_count_sql(sql, *args)
        try:
            with self.session_factory() as session:
                return int(session.connection().exec_driver_sql(query).scalar_one())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to count rows: {e}") from e
