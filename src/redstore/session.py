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
"""Session: named, cookie-correlated state plus its cookie options."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from redstore.ports.outbound import SessionStore

DEFAULT_PATH = "/"
DEFAULT_MAX_AGE = 86400 * 30  # 30 days


class SameSite(str, enum.Enum):
    """Cookie ``SameSite`` policy.  ``DEFAULT`` omits the attribute."""

    DEFAULT = "default"
    LAX = "lax"
    STRICT = "strict"
    NONE = "none"

    @classmethod
    def parse(cls, value: SameSite | str | int) -> SameSite:
        """Accept a member, a case-insensitive name, or a numeric code 1-4."""
        if isinstance(value, SameSite):
            return value
        codes = {1: cls.DEFAULT, 2: cls.LAX, 3: cls.STRICT, 4: cls.NONE}
        if isinstance(value, int):
            if value not in codes:
                raise ValueError(f"invalid SameSite code: {value}")
            return codes[value]
        text = str(value).strip().lower()
        if text.isdigit():
            return cls.parse(int(text))
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"invalid SameSite policy: '{value}'") from None


@dataclass
class SessionOptions:
    """Cookie and expiry options carried by every session.

    ``max_age`` is in seconds: positive values set both the cache TTL and the
    cookie lifetime, ``0`` means no TTL and a browser-session cookie, and a
    negative value marks the session for deletion on the next save.
    """

    path: str = DEFAULT_PATH
    domain: str = ""
    max_age: int = DEFAULT_MAX_AGE
    secure: bool = False
    http_only: bool = False
    same_site: SameSite = SameSite.DEFAULT

    def __post_init__(self) -> None:
        self.same_site = SameSite.parse(self.same_site)

    def copy(self) -> SessionOptions:
        return dataclasses.replace(self)


class Session:
    """A named session and its values.

    Attributes:
        id: Cache identifier; empty until the first save.
        values: Application payload, persisted as a whole.
        options: Snapshot of the store defaults taken at construction.
        is_new: ``False`` only when the values were loaded from the cache.
    """

    def __init__(
        self,
        name: str,
        store: SessionStore | None = None,
        *,
        options: SessionOptions | None = None,
        values: dict[Any, Any] | None = None,
        is_new: bool = True,
    ) -> None:
        self._name = name
        self._store = store
        self.id = ""
        self.values: dict[Any, Any] = values if values is not None else {}
        self.options = options if options is not None else SessionOptions()
        self.is_new = is_new

    @property
    def name(self) -> str:
        return self._name

    @property
    def store(self) -> SessionStore | None:
        return self._store

    def invalidate(self) -> None:
        """Mark the session for deletion on the next save."""
        self.options.max_age = -1

    async def save(self, request: Any, response: Any) -> None:
        """Persist through the owning store."""
        if self._store is None:
            raise RuntimeError(f"session '{self._name}' is not bound to a store")
        await self._store.save(request, response, self)

    def __repr__(self) -> str:
        return f"Session(name={self._name!r}, is_new={self.is_new}, keys={len(self.values)})"
