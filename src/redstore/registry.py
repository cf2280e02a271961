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
"""SessionRegistry: request-scoped cache of constructed sessions."""

from __future__ import annotations

import asyncio
from typing import Any

from redstore.ports.outbound import SessionStore
from redstore.session import Session

REGISTRY_STATE_KEY = "session_registry"


class SessionRegistry:
    """Maps session names to the sessions already built for one request.

    Guarantees that every ``get`` for the same name within a request returns
    the same object.  It gives no protection between requests: two requests
    saving the same session id race at the cache, last write wins.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = asyncio.Lock()

    async def get(self, store: SessionStore, request: Any, name: str) -> Session:
        """Return the registered session *name*, building it via ``store.new`` once.

        Construction errors are not cached; a later call retries.
        """
        async with self._lock:
            session = self._sessions.get(name)
            if session is None:
                session = await store.new(request, name)
                self._sessions[name] = session
            return session

    async def save(self, request: Any, response: Any) -> None:
        """Save every registered session, raising an ``ExceptionGroup`` on failures."""
        errors: list[Exception] = []
        for session in list(self._sessions.values()):
            store = session.store
            if store is None:
                continue
            try:
                await store.save(request, response, session)
            except Exception as exc:
                errors.append(exc)
        if errors:
            raise ExceptionGroup("failed to save sessions", errors)

    def names(self) -> list[str]:
        return list(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()


def registry_for(request: Any) -> SessionRegistry:
    """Return the registry attached to *request*, attaching a new one if absent."""
    state = request.state
    registry = getattr(state, REGISTRY_STATE_KEY, None)
    if registry is None:
        registry = SessionRegistry()
        setattr(state, REGISTRY_STATE_KEY, registry)
    return registry
