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
"""Store bootstrap: builds a Redis-backed session store from configuration."""

from __future__ import annotations

import redis.asyncio as aioredis
import structlog

from redstore.cache.adapters.redis import RedisCacheClient
from redstore.config import Config
from redstore.errors import SessionStoreError
from redstore.keygen import KeyGenerator, SecureKeyGenerator, UuidKeyGenerator
from redstore.properties import RedisProperties, SessionProperties
from redstore.serializers import JsonSerializer, PickleSerializer, SessionSerializer
from redstore.session import SameSite, SessionOptions
from redstore.store import CacheSessionStore, StoreConfig

logger = structlog.get_logger("redstore.bootstrap")

_KEY_GENERATORS: dict[str, type[KeyGenerator]] = {
    "secure": SecureKeyGenerator,
    "uuid": UuidKeyGenerator,
}

_SERIALIZERS: dict[str, type[SessionSerializer]] = {
    "pickle": PickleSerializer,
    "json": JsonSerializer,
}


def store_config_from_properties(props: SessionProperties) -> StoreConfig:
    """Translate bound session properties into a :class:`StoreConfig`."""
    generator_cls = _KEY_GENERATORS.get(props.key_generator.lower())
    if generator_cls is None:
        raise ValueError(f"unknown key generator '{props.key_generator}', expected one of {sorted(_KEY_GENERATORS)}")
    serializer_cls = _SERIALIZERS.get(props.serializer.lower())
    if serializer_cls is None:
        raise ValueError(f"unknown serializer '{props.serializer}', expected one of {sorted(_SERIALIZERS)}")

    options = SessionOptions(
        path=props.path,
        domain=props.domain,
        max_age=props.max_age,
        secure=props.secure,
        http_only=props.http_only,
        same_site=SameSite.parse(props.same_site),
    )
    return StoreConfig(
        options=options,
        key_prefix=props.key_prefix,
        session_name=props.cookie_name,
        regenerate_unknown_ids=props.regenerate_unknown_ids,
        key_generator=generator_cls(),
        serializer=serializer_cls(),
    )


async def create_session_store(config: Config) -> CacheSessionStore:
    """Connect to Redis and return a ready store.

    The Redis client is closed again if the initial ping fails.
    """
    redis_props = config.bind(RedisProperties)
    session_props = config.bind(SessionProperties)
    store_config = store_config_from_properties(session_props)

    if config.loaded_sources:
        logger.info("config_loaded", sources=config.loaded_sources)
    logger.debug("init", component="redis", url=redis_props.url)
    client = aioredis.from_url(
        redis_props.url,
        username=redis_props.username or None,
        password=redis_props.password or None,
        socket_timeout=redis_props.socket_timeout,
    )
    cache = RedisCacheClient(client)

    logger.debug("init", component="session", key_prefix=store_config.key_prefix)
    try:
        return await CacheSessionStore.connect(cache, store_config)
    except SessionStoreError:
        await cache.close()
        raise


async def shutdown_session_store(store: CacheSessionStore) -> None:
    """Close the store's cache connection."""
    logger.debug("shutdown", component="session")
    await store.close()
