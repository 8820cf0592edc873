"""Application services: the read-through cache handler."""

from cachelayer.application.services.cache_handler import CacheHandler

__all__ = ["CacheHandler"]
