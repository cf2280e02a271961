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
"""Session cookie construction and Starlette cookie I/O.

Framework-agnostic on the read side (``request.cookies``); writes go through
``Response.set_cookie`` as implemented by Starlette.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from redstore.session import SameSite, SessionOptions

# Expires value used to make browsers drop a cookie immediately.
EXPIRED = datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)


@dataclass(frozen=True)
class Cookie:
    """A ``Set-Cookie`` instruction."""

    name: str
    value: str
    path: str = "/"
    domain: str = ""
    max_age: int | None = None
    expires: datetime | None = None
    secure: bool = False
    http_only: bool = False
    same_site: SameSite = SameSite.DEFAULT


def new_cookie(name: str, value: str, options: SessionOptions) -> Cookie:
    """Build the cookie for *name* from session *options*.

    Positive ``max_age`` yields ``Max-Age`` plus a matching ``Expires``;
    negative ``max_age`` yields an already-expired cookie; zero yields a
    browser-session cookie.
    """
    max_age: int | None = None
    expires: datetime | None = None
    if options.max_age > 0:
        max_age = options.max_age
        expires = datetime.now(UTC) + timedelta(seconds=options.max_age)
    elif options.max_age < 0:
        max_age = 0
        expires = EXPIRED

    return Cookie(
        name=name,
        value=value,
        path=options.path,
        domain=options.domain,
        max_age=max_age,
        expires=expires,
        secure=options.secure,
        http_only=options.http_only,
        same_site=options.same_site,
    )


def read_cookie(request: Any, name: str) -> str | None:
    """Return the value of cookie *name* on *request*, or ``None``."""
    cookies = getattr(request, "cookies", None) or {}
    return cookies.get(name)


def write_cookie(response: Any, cookie: Cookie) -> None:
    """Attach *cookie* to *response* as a ``Set-Cookie`` header."""
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        max_age=cookie.max_age,
        expires=cookie.expires,
        path=cookie.path or None,
        domain=cookie.domain or None,
        secure=cookie.secure,
        httponly=cookie.http_only,
        samesite=None if cookie.same_site is SameSite.DEFAULT else cookie.same_site.value,
    )
