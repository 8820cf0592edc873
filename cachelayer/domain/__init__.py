"""Domain layer: cache value types and exceptions.

No dependencies on infrastructure. Used by application and infrastructure
layers.
"""

from cachelayer.domain.entities import KeyComponent, KeyValue
from cachelayer.domain.exceptions import (
    CacheIOError,
    CacheLayerException,
    DatabaseError,
    DeserializationError,
    NoIdentityFieldError,
    SerializationError,
)

__all__ = [
    # Entities
    "KeyComponent",
    "KeyValue",
    # Exceptions
    "CacheIOError",
    "CacheLayerException",
    "DatabaseError",
    "DeserializationError",
    "NoIdentityFieldError",
    "SerializationError",
]
