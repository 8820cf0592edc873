"""Read-through cache handler.

get_entry checks the cache, falls back to the database on a miss, and
stores the loaded entry back. A failed cache read is treated as a miss and
a failed cache write is logged. Corrupt cached payloads, database errors
and entries without identity fields reach the caller.

Concurrent misses for the same key are not deduplicated: each caller
queries the database and stores back, and the last write wins.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from cachelayer.application.interfaces import ICache, IDatabase
from cachelayer.core.config import get_settings
from cachelayer.core.options import CacheOptions, OptionsFunc
from cachelayer.domain.entities import KeyValue
from cachelayer.infrastructure.cache.keys import KeyScheme
from cachelayer.infrastructure.serializers.json_serializer import JsonSerializer
from cachelayer.shared.telemetry.logging import get_logger
from cachelayer.shared.telemetry.tracing import add_span_attributes, add_span_event, traced


class CacheHandler:
    """Read-through coordinator between an ICache and an IDatabase.

    Options are applied once at construction; the resulting key scheme,
    serializer and logger are fixed for the handler's lifetime. The handler
    keeps no per-call state, so one instance may serve many threads when
    the injected cache and database are thread-safe.
    """

    def __init__(self, cache: ICache, database: IDatabase, *options: OptionsFunc) -> None:
        """Build a handler.

        Args:
            cache: Cache backend consulted first and filled on a miss.
            database: Backing store consulted on a miss.
            *options: Option functions (with_service_name, with_serializer, ...),
                applied in order over defaults taken from Settings.
        """
        opts = CacheOptions.from_settings(get_settings())
        for option in options:
            option(opts)

        self.cache = cache
        self.database = database
        self.serializer = opts.serializer or JsonSerializer()
        self.log = opts.logger or get_logger()
        self.key_scheme = KeyScheme(
            service_name=opts.service_name,
            tag_name=opts.cache_tag_name,
            null_placeholder=opts.null_placeholder,
        )

    @traced("cachelayer.get_entry")
    def get_entry(self, entry: Any) -> bool:
        """Populate entry from the cache, or from the database on a miss.

        entry must already carry its identity field values; the rest is
        filled in place.

        Returns:
            True if the entry was found; False if it does not exist.

        Raises:
            NoIdentityFieldError: If entry exposes no identity field.
            DeserializationError: If the cached payload cannot be decoded.
            Exception: Whatever the database raises, unchanged.
        """
        entry_key = self.key_scheme.key_for(entry)
        add_span_attributes(entry_type=type(entry).__name__)

        try:
            cached = self.cache.get(entry_key)
        except Exception as e:
            self.log.warning(
                "Failed to get data from cache err:%s entry_key:%s", e, entry_key
            )
            cached = None

        if cached is not None:
            self.serializer.deserialize(cached, entry)
            add_span_event("cache.hit")
            return True

        add_span_event("cache.miss")
        found = self.database.get_entry(entry)
        if found:
            self.store_batch([entry])
        else:
            self.log.debug("Entry not found in database entry_key:%s", entry_key)
        return found

    @traced("cachelayer.store_batch")
    def store_batch(self, entries: Iterable[Any]) -> None:
        """Serialize entries and store them in one cache call.

        Entries whose key or payload cannot be built are logged and skipped;
        a failed store is logged. Nothing is raised and nothing is retried.
        """
        key_values: list[KeyValue] = []
        for entry in entries:
            try:
                entry_key = self.key_scheme.key_for(entry)
            except Exception as e:
                self.log.error("Failed to derive cache key err:%s entry:%r", e, entry)
                continue
            try:
                value = self.serializer.serialize(entry)
            except Exception as e:
                self.log.error(
                    "Failed serialize err:%s entry_key:%s", e, entry_key
                )
                continue
            key_values.append(KeyValue(key=entry_key, value=value))

        if not key_values:
            return
        try:
            self.cache.store_all(key_values)
        except Exception as e:
            self.log.warning(
                "Failed store_all err:%s keys:%s", e, [kv.key for kv in key_values]
            )
            return
        add_span_event("cache.fill", {"count": len(key_values)})

    def entry_keys(self, entries: Iterable[Any]) -> list[str]:
        """Cache keys for entries under this handler's scheme, in order.

        Raises:
            NoIdentityFieldError: On the first entry without identity; no partial list.
        """
        return self.key_scheme.keys_for(entries)
