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
"""Cache client protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheClient(Protocol):
    """Byte-oriented key-value cache consumed by the session store.

    All cache backends (Redis, in-memory, etc.) must implement this protocol.
    ``get`` raises :class:`~redstore.errors.KeyNotFoundError` on a miss and
    ``delete`` succeeds whether or not the key exists.  A ``ttl`` of ``None``
    or ``0`` stores the value without expiry.
    """

    async def get(self, key: str) -> bytes: ...

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def ping(self) -> None: ...

    async def close(self) -> None: ...
