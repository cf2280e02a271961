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
"""redstore: server-side HTTP sessions kept in a remote key-value cache.

Import concrete cache clients from the adapter package::

    from redstore.cache.adapters.memory import InMemoryCacheClient
    from redstore.cache.adapters.redis import RedisCacheClient
"""

from redstore.errors import (
    CacheError,
    CacheUnavailableError,
    CorruptSessionError,
    KeyGenerationError,
    KeyNotFoundError,
    SerializationError,
    SessionStoreError,
)
from redstore.keygen import KeyGenerator, SecureKeyGenerator, UuidKeyGenerator
from redstore.middleware import SessionMiddleware, get_session, get_store, new_session, save_sessions
from redstore.ports.outbound import SessionStore
from redstore.serializers import JsonSerializer, PickleSerializer, SessionSerializer
from redstore.session import SameSite, Session, SessionOptions
from redstore.store import CacheSessionStore, StoreConfig

__all__ = [
    "CacheError",
    "CacheSessionStore",
    "CacheUnavailableError",
    "CorruptSessionError",
    "JsonSerializer",
    "KeyGenerationError",
    "KeyGenerator",
    "KeyNotFoundError",
    "PickleSerializer",
    "SameSite",
    "SecureKeyGenerator",
    "SerializationError",
    "Session",
    "SessionMiddleware",
    "SessionOptions",
    "SessionSerializer",
    "SessionStore",
    "SessionStoreError",
    "StoreConfig",
    "UuidKeyGenerator",
    "get_session",
    "get_store",
    "new_session",
    "save_sessions",
]
