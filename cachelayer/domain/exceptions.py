"""Exceptions raised by the cache layer.

NoIdentityFieldError, DeserializationError and DatabaseError reach the
caller of CacheHandler.get_entry. CacheIOError and SerializationError are
raised by adapters and downgraded to log lines by the handler, because the
cache is an optimization and never a dependency for correctness.
"""

from typing import Any


class CacheLayerException(Exception):
    """Base exception for all cache layer errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. entry type, cache key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class NoIdentityFieldError(CacheLayerException):
    """Raised when an entry has neither tagged identity fields nor an id/key field."""

    def __init__(self, entry_type: str, tag_name: str) -> None:
        """Initialize with the entry type and the tag that was searched for.

        Args:
            entry_type: Class name of the entry.
            tag_name: Metadata key that marks identity fields.
        """
        super().__init__(
            f"No field tagged {tag_name!r} and no 'id' or 'key' field found on {entry_type}",
            "NO_IDENTITY_FIELD",
            {"entry_type": entry_type, "tag_name": tag_name},
        )


class SerializationError(CacheLayerException):
    """Raised when a value cannot be encoded for the cache."""

    def __init__(self, value_type: str, reason: str) -> None:
        super().__init__(
            f"Cannot serialize {value_type}: {reason}",
            "SERIALIZATION_ERROR",
            {"value_type": value_type},
        )


class DeserializationError(CacheLayerException):
    """Raised when a cached payload is corrupt or incompatible with the target type."""

    def __init__(self, target_type: str, reason: str) -> None:
        super().__init__(
            f"Cannot deserialize cached payload into {target_type}: {reason}",
            "DESERIALIZATION_ERROR",
            {"target_type": target_type},
        )


class DatabaseError(CacheLayerException):
    """Raised by database adapters when the backing store query fails."""

    def __init__(self, message: str, entry_type: str | None = None) -> None:
        details = {"entry_type": entry_type} if entry_type else {}
        super().__init__(message, "DATABASE_ERROR", details)


class CacheIOError(CacheLayerException):
    """Raised by cache adapters when a read or write against the backend fails."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize with the failed operation and the backend's reason.

        Args:
            operation: Cache operation that failed (e.g. 'get', 'store_all').
            reason: Backend error description.
        """
        super().__init__(
            f"Cache {operation} failed: {reason}",
            "CACHE_IO_ERROR",
            {"operation": operation},
        )
