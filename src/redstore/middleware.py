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
"""SessionMiddleware: publishes the session store on every HTTP request.

Handlers then work with sessions explicitly::

    session = await get_session(request, "sid")
    session.values["user"] = 42
    await session.save(request, response)
"""

from __future__ import annotations

from collections.abc import Sequence
from fnmatch import fnmatch
from typing import Any

from starlette.types import ASGIApp, Receive, Scope, Send

from redstore.errors import SessionStoreError
from redstore.ports.outbound import SessionStore
from redstore.registry import REGISTRY_STATE_KEY, SessionRegistry, registry_for
from redstore.session import Session

STORE_STATE_KEY = "session_store"


class SessionMiddleware:
    """Pure ASGI middleware attaching a store and a fresh registry to the request state.

    Requests whose path matches one of ``exclude_patterns`` (glob syntax) pass
    through untouched.  The registry is dropped once the downstream app
    returns, so sessions never outlive their request.
    """

    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore,
        exclude_patterns: Sequence[str] = (),
    ) -> None:
        self.app = app
        self._store = store
        self._exclude_patterns = list(exclude_patterns)

    def should_not_filter(self, path: str) -> bool:
        return any(fnmatch(path, p) for p in self._exclude_patterns)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.should_not_filter(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        state[STORE_STATE_KEY] = self._store
        state[REGISTRY_STATE_KEY] = SessionRegistry()
        try:
            await self.app(scope, receive, send)
        finally:
            state.pop(REGISTRY_STATE_KEY, None)


def get_store(request: Any) -> SessionStore:
    """Return the store published by :class:`SessionMiddleware`."""
    store = getattr(request.state, STORE_STATE_KEY, None)
    if store is None:
        raise SessionStoreError(f"'{STORE_STATE_KEY}' session store not found", code="STORE_NOT_FOUND")
    return store


async def get_session(request: Any, name: str | None = None) -> Session:
    """Return the request-scoped session *name*, defaulting to the store's session name."""
    store = get_store(request)
    return await store.get(request, name or store.session_name)


async def new_session(request: Any, name: str | None = None) -> Session:
    """Build a session *name* that is not registered with the request."""
    store = get_store(request)
    return await store.new(request, name or store.session_name)


async def save_sessions(request: Any, response: Any) -> None:
    """Save every session obtained through :func:`get_session` in this request."""
    await registry_for(request).save(request, response)
