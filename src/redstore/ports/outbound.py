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
"""Session store protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from redstore.session import Session


@runtime_checkable
class SessionStore(Protocol):
    """Session lifecycle interface consumed by the middleware and handlers.

    Uses generic ``Any`` types for Request/Response so that vendor-specific
    types (e.g. Starlette) stay out of the contract.
    """

    @property
    def session_name(self) -> str:
        """Default session name for helpers that are not given one."""
        ...

    async def get(self, request: Any, name: str) -> Session:
        """Return the request-scoped session *name*, constructing it once."""
        ...

    async def new(self, request: Any, name: str) -> Session:
        """Construct a session for *name*, bypassing the request registry."""
        ...

    async def save(self, request: Any, response: Any, session: Session) -> None:
        """Persist *session* and set (or clear) its cookie on *response*."""
        ...
