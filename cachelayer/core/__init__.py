"""Core: settings, handler options, and constants.

Single place for configuration and the cache key format constants.
"""

from cachelayer.core.config import Settings, get_settings
from cachelayer.core.options import (
    CacheOptions,
    OptionsFunc,
    with_cache_tag_name,
    with_logger,
    with_null_placeholder,
    with_serializer,
    with_service_name,
)

__all__ = [
    "CacheOptions",
    "OptionsFunc",
    "Settings",
    "get_settings",
    "with_cache_tag_name",
    "with_logger",
    "with_null_placeholder",
    "with_serializer",
    "with_service_name",
]
