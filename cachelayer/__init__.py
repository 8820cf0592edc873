"""cachelayer: read-through entry caching with deterministic cache keys.

Typical use::

    handler = CacheHandler(RedisCache(), SqlAlchemyDatabase(...), with_service_name("orders"))
    entry = OrderLine(order_id=7, line_no=2)
    if handler.get_entry(entry):
        ...
"""

from cachelayer.application.interfaces import ICache, IDatabase, ILogger, ISerializer
from cachelayer.application.services.cache_handler import CacheHandler
from cachelayer.core.options import (
    CacheOptions,
    OptionsFunc,
    with_cache_tag_name,
    with_logger,
    with_null_placeholder,
    with_serializer,
    with_service_name,
)
from cachelayer.domain.entities import KeyComponent, KeyValue
from cachelayer.domain.exceptions import (
    CacheIOError,
    CacheLayerException,
    DatabaseError,
    DeserializationError,
    NoIdentityFieldError,
    SerializationError,
)
from cachelayer.infrastructure.cache.keys import (
    KeyScheme,
    get_entry_cache_key,
    get_entry_cache_keys,
)
from cachelayer.infrastructure.cache.memory_cache import MemoryCache
from cachelayer.infrastructure.cache.redis_cache import RedisCache
from cachelayer.infrastructure.serializers.json_serializer import JsonSerializer

__version__ = "1.0.0"

__all__ = [
    "CacheHandler",
    "CacheIOError",
    "CacheLayerException",
    "CacheOptions",
    "DatabaseError",
    "DeserializationError",
    "ICache",
    "IDatabase",
    "ILogger",
    "ISerializer",
    "JsonSerializer",
    "KeyComponent",
    "KeyScheme",
    "KeyValue",
    "MemoryCache",
    "NoIdentityFieldError",
    "OptionsFunc",
    "RedisCache",
    "SerializationError",
    "get_entry_cache_key",
    "get_entry_cache_keys",
    "with_cache_tag_name",
    "with_logger",
    "with_null_placeholder",
    "with_serializer",
    "with_service_name",
]
