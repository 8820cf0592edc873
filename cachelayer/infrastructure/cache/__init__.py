"""Cache: key derivation and cache backends.

Key format lives in keys.py (DRY). MemoryCache and RedisCache implement
ICache from cachelayer.application.interfaces.
"""

from cachelayer.infrastructure.cache.keys import (
    DEFAULT_KEY_SCHEME,
    IdentityField,
    KeyScheme,
    build_cache_key,
    get_entry_cache_key,
    get_entry_cache_keys,
)
from cachelayer.infrastructure.cache.memory_cache import MemoryCache
from cachelayer.infrastructure.cache.redis_cache import RedisCache

__all__ = [
    "DEFAULT_KEY_SCHEME",
    "IdentityField",
    "KeyScheme",
    "MemoryCache",
    "RedisCache",
    "build_cache_key",
    "get_entry_cache_key",
    "get_entry_cache_keys",
]
