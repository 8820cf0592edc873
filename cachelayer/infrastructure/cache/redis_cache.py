"""Redis-backed cache backend.

Synchronous redis-py client with optional TTL. Backend failures are raised
as CacheIOError; CacheHandler logs them and falls through to the database,
so a Redis outage slows reads down but never fails them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

import redis

from cachelayer.core.config import get_settings
from cachelayer.domain.entities import KeyValue
from cachelayer.domain.exceptions import CacheIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisCache:
    """ICache over Redis with TTL support.

    Uses cachelayer.core.config for connection settings. Call connect() at
    startup and close() at shutdown, or inject a ready client.
    """

    def __init__(
        self, redis_client: redis.Redis | None = None, ttl: int | None = None
    ) -> None:
        """Initialize the cache.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
            ttl: Time-to-live in seconds for stored keys; defaults to settings.cache_ttl.
        """
        self.settings = get_settings()
        self.redis = redis_client
        self.ttl = ttl if ttl is not None else self.settings.cache_ttl
        self._connected = redis_client is not None
        # Guards swapping self.redis (connect, close, reconnect).
        self._lock = threading.Lock()

    def connect(self) -> None:
        """Establish the Redis connection. Leaves the cache unavailable on failure."""
        with self._lock:
            self._connect()

    def _connect(self) -> None:
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
            socket_connect_timeout=self.settings.redis_socket_timeout,
            socket_timeout=self.settings.redis_socket_timeout,
            socket_keepalive=True,
        )
        try:
            client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    def close(self) -> None:
        """Close the Redis connection."""
        with self._lock:
            client, self.redis = self.redis, None
            self._connected = False
        if client is not None:
            client.close()
            logger.info("Redis cache disconnected")

    def _reconnect(self, stale: redis.Redis) -> redis.Redis | None:
        """Replace stale with a fresh client.

        If another thread already replaced or closed stale, its result is
        returned without connecting again.

        Returns:
            The client to retry with, or None if Redis is unreachable.
        """
        with self._lock:
            if self.redis is not stale:
                return self.redis
            try:
                stale.close()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
            self.redis = None
            self._connected = False
            self._connect()
            return self.redis

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    def _execute(self, operation: str, command: Callable[[redis.Redis], T]) -> T:
        """Run command against the client, retrying once after a reconnect.

        Raises:
            CacheIOError: If Redis is unavailable or the command fails.
        """
        client = self.redis
        if client is None or not self._connected:
            raise CacheIOError(operation, "Redis not connected")
        try:
            return command(client)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            fresh = self._reconnect(client)
            if fresh is not None:
                try:
                    return command(fresh)
                except redis.RedisError as retry_error:
                    raise CacheIOError(operation, str(retry_error)) from retry_error
            logger.warning("Cache %s unavailable (Redis disconnected)", operation)
            raise CacheIOError(operation, str(e)) from e
        except redis.RedisError as e:
            raise CacheIOError(operation, str(e)) from e

    def store_all(self, key_values: Sequence[KeyValue]) -> None:
        """SET every pair in one non-transactional pipeline."""
        if not key_values:
            return

        def command(client: redis.Redis) -> None:
            with client.pipeline(transaction=False) as pipe:
                for kv in key_values:
                    pipe.set(kv.key, kv.value, ex=self.ttl)
                pipe.execute()

        self._execute("store_all", command)
        logger.debug("Cache SET: %s keys (TTL: %ss)", len(key_values), self.ttl)

    def get(self, key: str) -> bytes | None:
        value = self._execute("get", lambda client: client.get(key))
        logger.debug("Cache %s: %s", "HIT" if value is not None else "MISS", key)
        return value

    def get_all(self, keys: Iterable[str]) -> dict[str, bytes]:
        """MGET keys; absent keys are omitted from the result."""
        key_list = list(keys)
        if not key_list:
            return {}
        values = self._execute("get_all", lambda client: client.mget(key_list))
        return {key: value for key, value in zip(key_list, values) if value is not None}

    def delete_all(self, keys: Iterable[str]) -> int:
        """UNLINK keys (non-blocking delete). Returns number of keys removed."""
        key_list = list(keys)
        if not key_list:
            return 0
        deleted = int(self._execute("delete_all", lambda client: client.unlink(*key_list)) or 0)
        if deleted > 0:
            logger.info("Cache DELETE: %s keys", deleted)
        return deleted
