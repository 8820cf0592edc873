"""Handler options: named option functions applied to a mutable CacheOptions.

CacheHandler seeds a CacheOptions from Settings, applies each option in
order, then freezes the result into a KeyScheme. Options are read once at
construction; mutating a CacheOptions afterwards has no effect on the handler.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cachelayer.core.config import Settings
from cachelayer.core.constants import DEFAULT_CACHE_TAG_NAME, DEFAULT_NULL_PLACEHOLDER

if TYPE_CHECKING:
    from cachelayer.application.interfaces import ILogger, ISerializer


@dataclass
class CacheOptions:
    """Mutable settings object the option functions write to."""

    service_name: str = ""
    cache_tag_name: str = DEFAULT_CACHE_TAG_NAME
    null_placeholder: str = DEFAULT_NULL_PLACEHOLDER
    serializer: ISerializer | None = None
    logger: ILogger | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheOptions:
        """Build options whose key-scheme values default to the environment."""
        return cls(
            service_name=settings.service_name,
            cache_tag_name=settings.cache_tag_name,
            null_placeholder=settings.null_placeholder,
        )


OptionsFunc = Callable[[CacheOptions], None]


def with_service_name(service_name: str) -> OptionsFunc:
    """Prefix every cache key with service_name (keys from different services never collide)."""

    def option(options: CacheOptions) -> None:
        options.service_name = service_name

    return option


def with_cache_tag_name(tag_name: str) -> OptionsFunc:
    """Read identity fields from metadata key tag_name instead of "cache".

    An empty tag name keeps the default.
    """

    def option(options: CacheOptions) -> None:
        options.cache_tag_name = tag_name or DEFAULT_CACHE_TAG_NAME

    return option


def with_serializer(serializer: ISerializer) -> OptionsFunc:
    """Use serializer for cached payloads instead of JsonSerializer."""

    def option(options: CacheOptions) -> None:
        options.serializer = serializer

    return option


def with_logger(logger: ILogger) -> OptionsFunc:
    """Send handler diagnostics to logger instead of the cachelayer logger."""

    def option(options: CacheOptions) -> None:
        options.logger = logger

    return option


def with_null_placeholder(placeholder: str) -> OptionsFunc:
    """Format None identity values as placeholder in cache keys."""

    def option(options: CacheOptions) -> None:
        options.null_placeholder = placeholder

    return option
