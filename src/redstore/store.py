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
"""CacheSessionStore: sessions kept in a remote key-value cache.

The browser only ever holds the session id (in a cookie named after the
session); the values live in the cache under ``key_prefix + id`` with a TTL
equal to the session's ``max_age``.  Every request re-reads the cache, so any
number of processes can share one store backend.

There is no locking across requests.  Two requests saving the same session
concurrently race at the cache and the last write wins.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

import structlog

from redstore.cache.ports.outbound import CacheClient
from redstore.cookies import new_cookie, read_cookie, write_cookie
from redstore.errors import KeyGenerationError, KeyNotFoundError
from redstore.keygen import KeyGenerator, SecureKeyGenerator
from redstore.registry import registry_for
from redstore.serializers import PickleSerializer, SessionSerializer
from redstore.session import Session, SessionOptions

logger = structlog.get_logger("redstore.store")

DEFAULT_KEY_PREFIX = "session:"
DEFAULT_SESSION_NAME = "id"


@dataclass(frozen=True)
class StoreConfig:
    """Process-wide store settings, fixed before the store serves traffic."""

    options: SessionOptions = field(default_factory=SessionOptions)
    key_prefix: str = DEFAULT_KEY_PREFIX
    session_name: str = DEFAULT_SESSION_NAME
    key_generator: KeyGenerator = field(default_factory=SecureKeyGenerator)
    serializer: SessionSerializer = field(default_factory=PickleSerializer)
    # Drop the cookie id on a cache miss so the next save issues a fresh one.
    regenerate_unknown_ids: bool = False


def _short(session_id: str) -> str:
    return session_id[:8]


class CacheSessionStore:
    """Session store backed by a :class:`~redstore.cache.ports.outbound.CacheClient`.

    Prefer :meth:`connect`, which pings the cache so a misconfigured backend
    fails at startup instead of on the first request.
    """

    def __init__(self, client: CacheClient, config: StoreConfig | None = None) -> None:
        self._client = client
        self._config = config if config is not None else StoreConfig()

    @classmethod
    async def connect(cls, client: CacheClient, config: StoreConfig | None = None) -> CacheSessionStore:
        """Create a store and verify the cache is reachable."""
        store = cls(client, config)
        await client.ping()
        return store

    # -- configuration ------------------------------------------------------
    # The setters are meant for startup, before concurrent use.  Sessions that
    # already exist keep the options snapshot they were built with.

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def options(self) -> SessionOptions:
        return self._config.options.copy()

    @property
    def key_prefix(self) -> str:
        return self._config.key_prefix

    @property
    def session_name(self) -> str:
        """Name used when callers do not pick one; it is also the cookie name."""
        return self._config.session_name

    def set_options(self, options: SessionOptions) -> None:
        self._config = dataclasses.replace(self._config, options=options.copy())

    def set_key_prefix(self, key_prefix: str) -> None:
        self._config = dataclasses.replace(self._config, key_prefix=key_prefix)

    def set_key_generator(self, key_generator: KeyGenerator) -> None:
        self._config = dataclasses.replace(self._config, key_generator=key_generator)

    def set_serializer(self, serializer: SessionSerializer) -> None:
        self._config = dataclasses.replace(self._config, serializer=serializer)

    # -- lifecycle ----------------------------------------------------------

    async def get(self, request: Any, name: str) -> Session:
        """Return the session *name* for this request, registering it on first use."""
        return await registry_for(request).get(self, request, name)

    async def new(self, request: Any, name: str) -> Session:
        """Build a session for *name* without consulting the request registry.

        A missing cookie, or a cookie whose id has no cache entry, yields a new
        empty session.  On a miss the session keeps the cookie id unless
        ``regenerate_unknown_ids`` is set.  Any other load failure propagates.
        """
        config = self._config
        session = Session(name, self, options=config.options.copy(), is_new=True)

        session_id = read_cookie(request, name)
        if not session_id:
            return session

        session.id = session_id
        try:
            await self._load(session)
        except KeyNotFoundError:
            logger.debug("session_miss", name=name, id=_short(session_id))
            if config.regenerate_unknown_ids:
                session.id = ""
            return session

        session.is_new = False
        logger.debug("session_loaded", name=name, id=_short(session_id), keys=len(session.values))
        return session

    async def save(self, request: Any, response: Any, session: Session) -> None:
        """Write *session* to the cache and set its cookie on *response*.

        A negative ``max_age`` deletes the cache entry and expires the cookie
        instead.  Nothing is written to the response if the cache write fails.
        """
        if session.options.max_age < 0:
            await self._delete(session)
            write_cookie(response, new_cookie(session.name, "", session.options))
            logger.debug("session_deleted", name=session.name, id=_short(session.id))
            return

        if not session.id:
            session.id = self._generate_id()

        await self._save(session)
        write_cookie(response, new_cookie(session.name, session.id, session.options))
        logger.debug(
            "session_saved",
            name=session.name,
            id=_short(session.id),
            max_age=session.options.max_age,
        )

    async def delete(self, session: Session) -> None:
        """Evict *session* from the cache without touching any cookie."""
        await self._delete(session)

    async def close(self) -> None:
        """Close the underlying cache client."""
        await self._client.close()

    # -- internals ----------------------------------------------------------

    def _key(self, session_id: str) -> str:
        return f"{self._config.key_prefix}{session_id}"

    def _generate_id(self) -> str:
        try:
            session_id = self._config.key_generator.generate()
        except Exception as exc:
            raise KeyGenerationError("failed to generate session id", code="KEY_GENERATION") from exc
        if not session_id:
            raise KeyGenerationError(
                "failed to generate session id: generator returned an empty id", code="KEY_GENERATION"
            )
        return session_id

    async def _save(self, session: Session) -> None:
        data = self._config.serializer.serialize(session.values)
        ttl = session.options.max_age if session.options.max_age > 0 else None
        await self._client.set(self._key(session.id), data, ttl=ttl)

    async def _load(self, session: Session) -> None:
        data = await self._client.get(self._key(session.id))
        session.values = self._config.serializer.deserialize(data)

    async def _delete(self, session: Session) -> None:
        await self._client.delete(self._key(session.id))
