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
"""Exception hierarchy for the session store.

Catch :class:`SessionStoreError` to handle every failure raised by this
package, or one of the subclasses for targeted handling.  The only condition
the store itself absorbs is :class:`KeyNotFoundError` while constructing a
session; everything else reaches the caller.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class SessionStoreError(Exception):
    """Base exception for all session store errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. ``"CACHE_UNAVAILABLE"``).
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Cache Exceptions
# =============================================================================


class CacheError(SessionStoreError):
    """The cache rejected or failed an operation."""


class KeyNotFoundError(CacheError):
    """The requested key has no current entry (missing or expired)."""

    def __init__(self, key: str) -> None:
        super().__init__(f"cache key not found: '{key}'", code="KEY_NOT_FOUND", context={"key": key})
        self.key = key


class CacheUnavailableError(CacheError):
    """The cache could not be reached (connection, ping or timeout failure)."""


# =============================================================================
# Session Exceptions
# =============================================================================


class CorruptSessionError(SessionStoreError):
    """A stored session payload is present but cannot be decoded."""


class SerializationError(SessionStoreError):
    """Session values could not be encoded for storage."""


class KeyGenerationError(SessionStoreError):
    """A session identifier could not be generated."""
