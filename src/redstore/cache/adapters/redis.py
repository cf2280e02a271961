# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Redis-backed cache client."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from redis import exceptions as redis_exceptions

from redstore.errors import CacheError, CacheUnavailableError, KeyNotFoundError

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def _translate_errors(op: str, key: str | None = None) -> AsyncIterator[None]:
    """Map redis-py exceptions onto the store's error taxonomy."""
    context = {"op": op} if key is None else {"op": op, "key": key}
    try:
        yield
    except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as exc:
        _logger.warning("Redis %s failed: %s", op.upper(), exc)
        raise CacheUnavailableError(
            f"redis unavailable during {op.upper()}: {exc}", code="CACHE_UNAVAILABLE", context=context
        ) from exc
    except redis_exceptions.RedisError as exc:
        raise CacheError(f"redis {op.upper()} failed: {exc}", code="CACHE_ERROR", context=context) from exc


class RedisCacheClient:
    """Cache client that delegates to a ``redis.asyncio.Redis``-like client.

    Values are stored as raw bytes; encoding is the serializer's job.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    async def get(self, key: str) -> bytes:
        """Return the stored bytes or raise ``KeyNotFoundError``."""
        async with _translate_errors("get", key):
            raw = await self._client.get(key)
        if raw is None:
            raise KeyNotFoundError(key)
        return raw.encode() if isinstance(raw, str) else bytes(raw)

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None:
        """Store *value*, expiring after *ttl* seconds when positive."""
        ex = ttl if ttl is not None and ttl > 0 else None
        async with _translate_errors("set", key):
            await self._client.set(key, value, ex=ex)

    async def delete(self, key: str) -> None:
        """Remove *key*; a missing key is not an error."""
        async with _translate_errors("del", key):
            await self._client.delete(key)

    async def ping(self) -> None:
        """Validate connectivity by pinging Redis."""
        async with _translate_errors("ping"):
            await self._client.ping()

    async def close(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
