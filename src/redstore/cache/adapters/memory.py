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
"""In-memory cache client with TTL-based expiry."""

from __future__ import annotations

import asyncio
import time

from redstore.errors import CacheUnavailableError, KeyNotFoundError


class InMemoryCacheClient:
    """In-memory cache client with TTL support and asyncio.Lock for safety.

    Suitable for development, testing, and single-process applications.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[bytes, float | None]] = {}
        self._lock = asyncio.Lock()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise CacheUnavailableError("in-memory cache is closed", code="CACHE_UNAVAILABLE")

    async def get(self, key: str) -> bytes:
        """Return the stored bytes. Raises ``KeyNotFoundError`` if missing or expired."""
        async with self._lock:
            self._check_open()
            entry = self._store.get(key)
            if entry is None:
                raise KeyNotFoundError(key)

            value, expires_at = entry
            if expires_at is not None and time.monotonic() > expires_at:
                del self._store[key]
                raise KeyNotFoundError(key)

            return value

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None:
        """Store bytes with a TTL in seconds; no expiry when *ttl* is not positive."""
        async with self._lock:
            self._check_open()
            expires_at = time.monotonic() + ttl if ttl is not None and ttl > 0 else None
            self._store[key] = (bytes(value), expires_at)

    async def delete(self, key: str) -> None:
        """Remove a key."""
        async with self._lock:
            self._check_open()
            self._store.pop(key, None)

    async def ping(self) -> None:
        self._check_open()

    async def close(self) -> None:
        self._closed = True
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
