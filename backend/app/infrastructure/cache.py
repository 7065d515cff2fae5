"""Status Cache: Redis-backed cache-aside store that degrades to a no-op.

Invariants:
    - Every public method is safe to call whether or not Redis is reachable
    - Any connect() failure (bad URL, refused ping) closes the half-built client
      and leaves the layer degraded: get -> None, set/delete no-op,
      logged at debug only
    - Any runtime client error is absorbed, logged with error_code CACHE_FAILURE,
      and behaves like a miss / no-op
    - Values are JSON documents of the final response shape
    - Employee keys are "employee:{national_key}"

Design Decisions:
    - Capability object with an internal availability flag: callers never
      null-check the client
    - redis.asyncio over a thread pool: cache calls share the request's event loop
    - SCAN over KEYS for prefix deletes: never blocks Redis on a large keyspace
"""

import json
import logging
from typing import Any, Callable

import redis.asyncio as aioredis

from app.core.errors import ErrorKind

logger = logging.getLogger(__name__)

EMPLOYEE_KEY_PREFIX = "employee:"
DEFAULT_TTL_SECONDS = 3600

ClientFactory = Callable[..., Any]


def employee_key(national_key: str) -> str:
    return f"{EMPLOYEE_KEY_PREFIX}{national_key}"


def _default_client_factory(url: str, **kwargs) -> aioredis.Redis:
    return aioredis.Redis.from_url(url, **kwargs)


class CacheLayer:
    """Redis cache with permanent degraded mode on startup failure."""

    def __init__(
        self,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        client_factory: ClientFactory = _default_client_factory,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self._client_factory = client_factory
        self._client: Any = None
        self._connected = False

    async def connect(
        self,
        url: str,
        connect_timeout_seconds: float = 2.0,
        socket_timeout_seconds: float = 2.0,
    ) -> None:
        """Open the client and ping. Never raises."""
        client = None
        try:
            client = self._client_factory(
                url,
                socket_connect_timeout=connect_timeout_seconds,
                socket_timeout=socket_timeout_seconds,
                decode_responses=True,
                encoding="utf-8",
            )
            await client.ping()
        except Exception as e:
            logger.warning(
                f"Failed to connect to Redis, running without cache: {e}",
                extra={"error_code": ErrorKind.CACHE_FAILURE.value},
            )
            if client is not None:
                await self._close_quietly(client)
            self._client = None
            self._connected = False
            return
        self._client = client
        self._connected = True
        logger.info("Cache layer connected")

    async def disconnect(self) -> None:
        if self._client is None:
            return
        await self._close_quietly(self._client)
        self._client = None
        self._connected = False
        logger.info("Cache layer disconnected")

    async def _close_quietly(self, client: Any) -> None:
        try:
            await client.aclose()
        except Exception as e:
            logger.warning(f"Error closing Redis client: {e}")

    def is_available(self) -> bool:
        return self._connected

    async def get(self, key: str) -> dict | None:
        if not self._connected:
            logger.debug("Cache not available, skipping get", extra={"cache_key": key})
            return None
        try:
            raw = await self._client.get(key)
        except Exception as e:
            self._log_failure("get", key, e)
            return None
        if raw is None:
            logger.debug(f"Cache MISS: {key}", extra={"cache_key": key})
            return None
        try:
            value = json.loads(raw)
        except ValueError as e:
            self._log_failure("decode", key, e)
            return None
        logger.debug(f"Cache HIT: {key}", extra={"cache_key": key})
        return value

    async def set(
        self, key: str, value: dict, ttl_seconds: int | None = None,
    ) -> None:
        if not self._connected:
            logger.debug("Cache not available, skipping set", extra={"cache_key": key})
            return
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        try:
            payload = json.dumps(value, ensure_ascii=False)
            await self._client.set(key, payload, ex=ttl)
        except Exception as e:
            self._log_failure("set", key, e)
            return
        logger.debug(f"Cache SET: {key} (TTL: {ttl}s)", extra={"cache_key": key})

    async def delete(self, key: str) -> None:
        if not self._connected:
            logger.debug("Cache not available, skipping delete", extra={"cache_key": key})
            return
        try:
            await self._client.delete(key)
        except Exception as e:
            self._log_failure("delete", key, e)
            return
        logger.debug(f"Cache DELETE: {key}", extra={"cache_key": key})

    async def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix. Returns the number deleted."""
        pattern = prefix if prefix.endswith("*") else f"{prefix}*"
        if not self._connected:
            logger.debug(
                "Cache not available, skipping delete by prefix",
                extra={"cache_key": pattern},
            )
            return 0
        try:
            keys = [k async for k in self._client.scan_iter(match=pattern)]
            if not keys:
                return 0
            deleted = int(await self._client.delete(*keys))
        except Exception as e:
            self._log_failure("delete_by_prefix", pattern, e)
            return 0
        logger.debug(
            f"Cache DELETE PREFIX: {pattern} ({deleted} keys)",
            extra={"cache_key": pattern},
        )
        return deleted

    def _log_failure(self, op: str, key: str, error: Exception) -> None:
        logger.warning(
            f"Cache {op} failed: {error}",
            extra={"cache_key": key, "error_code": ErrorKind.CACHE_FAILURE.value},
        )


# Singleton: unconnected (degraded) until the lifespan calls connect()
cache_layer = CacheLayer()


def init_cache(default_ttl_seconds: int) -> CacheLayer:
    cache_layer.default_ttl_seconds = default_ttl_seconds
    return cache_layer


def get_cache() -> CacheLayer:
    """FastAPI dependency for the shared cache layer."""
    return cache_layer
