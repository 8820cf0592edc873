"""Capability interfaces (ports) consumed by CacheHandler.

Protocols define the contracts the embedding application fulfils (DIP):
a cache backend, a database, a payload serializer, and a logger. They are
the only points of contact between the handler and the outside world.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from cachelayer.domain.entities import KeyValue


# Cache interface
class ICache(Protocol):
    """Protocol for key/value cache backends (e.g. Redis, in-process dict).

    Implementations own their thread safety; the handler adds no locking.
    Failures are raised (adapters raise CacheIOError).
    """

    def store_all(self, key_values: Sequence[KeyValue]) -> None:
        """Store every pair in one backend round-trip where possible."""

    def get(self, key: str) -> bytes | None:
        """Return the stored payload, or None when key is absent."""


# Database interface
class IDatabase(Protocol):
    """Protocol for the backing store consulted on a cache miss."""

    def get_entry(self, entry: Any) -> bool:
        """Look up entry by its identity fields and populate it in place.

        Returns:
            True if a matching record was found and copied onto entry.
        """


# Serializer interface
class ISerializer(Protocol):
    """Protocol for cache payload encoding. Must be symmetric."""

    def serialize(self, value: Any) -> bytes:
        """Encode value; raise SerializationError if it cannot be encoded."""

    def deserialize(self, data: bytes, target: Any) -> None:
        """Decode data onto target in place; raise DeserializationError on a bad payload."""


# Logger interface
class ILogger(Protocol):
    """Protocol for diagnostic sinks. A stdlib logging.Logger satisfies it."""

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...
