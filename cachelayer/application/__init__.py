"""Application layer: capability interfaces and the read-through handler."""

from cachelayer.application.interfaces import ICache, IDatabase, ILogger, ISerializer
from cachelayer.application.services.cache_handler import CacheHandler

__all__ = [
    "CacheHandler",
    "ICache",
    "IDatabase",
    "ILogger",
    "ISerializer",
]
