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
"""Tests for RedisCacheClient using a FakeRedis stub."""

from __future__ import annotations

import asyncio

import pytest
from redis import exceptions as redis_exceptions

from redstore.cache.adapters.redis import RedisCacheClient
from redstore.cache.ports.outbound import CacheClient
from redstore.errors import CacheError, CacheUnavailableError, KeyNotFoundError


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.expiries: dict[str, int | None] = {}
        self.closed = False
        self.pings = 0

    async def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    async def set(self, key: str, value: bytes, ex: int | None = None) -> None:
        self._store[key] = value
        self.expiries[key] = ex

    async def delete(self, *keys: str) -> int:
        count = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                count += 1
        return count

    async def ping(self) -> bool:
        self.pings += 1
        return True

    async def aclose(self) -> None:
        self.closed = True


class BrokenRedis:
    """Every call fails the way a dropped connection does."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def get(self, key: str) -> bytes | None:
        raise self._exc

    async def set(self, key: str, value: bytes, ex: int | None = None) -> None:
        raise self._exc

    async def delete(self, *keys: str) -> int:
        raise self._exc

    async def ping(self) -> bool:
        raise self._exc


class HangingRedis(FakeRedis):
    """GET blocks until cancelled, like a request stuck on a slow server."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = asyncio.Event()

    async def get(self, key: str) -> bytes | None:
        self.entered.set()
        await asyncio.Event().wait()
        return None


class TestRedisCacheClient:
    @pytest.mark.asyncio
    async def test_protocol_compliance(self):
        """RedisCacheClient satisfies the CacheClient protocol."""
        client: CacheClient = RedisCacheClient(FakeRedis())
        assert isinstance(client, CacheClient)
        await client.set("x", b"42")
        assert await client.get("x") == b"42"

    @pytest.mark.asyncio
    async def test_get_missing_key_raises_not_found(self):
        client = RedisCacheClient(FakeRedis())
        with pytest.raises(KeyNotFoundError) as exc_info:
            await client.get("no-such-key")
        assert exc_info.value.key == "no-such-key"
        assert exc_info.value.code == "KEY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_decodes_str_responses(self):
        """Clients created with decode_responses=True hand back str."""
        fake = FakeRedis()
        fake._store["k"] = "text"  # type: ignore[assignment]
        client = RedisCacheClient(fake)
        assert await client.get("k") == b"text"

    @pytest.mark.asyncio
    async def test_set_forwards_ttl(self):
        fake = FakeRedis()
        client = RedisCacheClient(fake)
        await client.set("key", b"val", ttl=60)
        assert fake.expiries["key"] == 60

    @pytest.mark.asyncio
    async def test_zero_or_missing_ttl_means_no_expiry(self):
        fake = FakeRedis()
        client = RedisCacheClient(fake)
        await client.set("a", b"1", ttl=0)
        await client.set("b", b"2")
        assert fake.expiries == {"a": None, "b": None}

    @pytest.mark.asyncio
    async def test_delete(self):
        client = RedisCacheClient(FakeRedis())
        await client.set("key", b"value")
        await client.delete("key")
        with pytest.raises(KeyNotFoundError):
            await client.get("key")

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self):
        client = RedisCacheClient(FakeRedis())
        await client.delete("missing")

    @pytest.mark.asyncio
    async def test_ping_and_close(self):
        fake = FakeRedis()
        client = RedisCacheClient(fake)
        await client.ping()
        await client.close()
        assert fake.pings == 1
        assert fake.closed is True


class TestRedisCacheClientErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [redis_exceptions.ConnectionError("refused"), redis_exceptions.TimeoutError("timed out")],
    )
    async def test_transport_failures_become_unavailable(self, exc):
        client = RedisCacheClient(BrokenRedis(exc))
        with pytest.raises(CacheUnavailableError) as exc_info:
            await client.get("key")
        assert exc_info.value.__cause__ is exc
        assert exc_info.value.context == {"op": "get", "key": "key"}

    @pytest.mark.asyncio
    async def test_ping_failure_is_unavailable(self):
        client = RedisCacheClient(BrokenRedis(redis_exceptions.ConnectionError("refused")))
        with pytest.raises(CacheUnavailableError):
            await client.ping()

    @pytest.mark.asyncio
    async def test_other_redis_errors_become_cache_error(self):
        client = RedisCacheClient(BrokenRedis(redis_exceptions.ResponseError("WRONGTYPE")))
        with pytest.raises(CacheError) as exc_info:
            await client.set("key", b"v", ttl=10)
        assert not isinstance(exc_info.value, CacheUnavailableError)
        assert not isinstance(exc_info.value, KeyNotFoundError)

    @pytest.mark.asyncio
    async def test_delete_failure_propagates(self):
        client = RedisCacheClient(BrokenRedis(redis_exceptions.ConnectionError("refused")))
        with pytest.raises(CacheUnavailableError):
            await client.delete("key")


class TestRedisCacheClientCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_get_propagates(self):
        redis = HangingRedis()
        client = RedisCacheClient(redis)
        task = asyncio.create_task(client.get("session:abc"))
        await redis.entered.wait()

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_timeout_reaches_caller_untranslated(self):
        redis = HangingRedis()
        client = RedisCacheClient(redis)
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(client.get("session:abc"), timeout=0.01)
