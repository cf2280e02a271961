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
"""Tests for session cookie construction and Starlette cookie I/O."""

from datetime import UTC, datetime, timedelta

from starlette.requests import Request
from starlette.responses import Response

from redstore.cookies import EXPIRED, new_cookie, read_cookie, write_cookie
from redstore.session import SameSite, SessionOptions


def _request(cookie_header: str | None = None) -> Request:
    headers = [(b"cookie", cookie_header.encode())] if cookie_header else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestNewCookie:
    def test_positive_max_age_sets_max_age_and_expires(self):
        before = datetime.now(UTC)
        cookie = new_cookie("sid", "abc", SessionOptions(max_age=3600))
        assert cookie.max_age == 3600
        assert cookie.expires is not None
        assert before + timedelta(seconds=3599) <= cookie.expires <= datetime.now(UTC) + timedelta(seconds=3600)

    def test_zero_max_age_is_browser_session_cookie(self):
        cookie = new_cookie("sid", "abc", SessionOptions(max_age=0))
        assert cookie.max_age is None
        assert cookie.expires is None

    def test_negative_max_age_expires_immediately(self):
        cookie = new_cookie("sid", "", SessionOptions(max_age=-1))
        assert cookie.max_age == 0
        assert cookie.expires == EXPIRED

    def test_copies_options(self):
        opts = SessionOptions(path="/app", domain="example.com", secure=True, http_only=True, same_site=SameSite.STRICT)
        cookie = new_cookie("sid", "abc", opts)
        assert (cookie.path, cookie.domain, cookie.secure, cookie.http_only, cookie.same_site) == (
            "/app",
            "example.com",
            True,
            True,
            SameSite.STRICT,
        )


class TestReadCookie:
    def test_present(self):
        assert read_cookie(_request("sid=abc; other=1"), "sid") == "abc"

    def test_absent(self):
        assert read_cookie(_request("other=1"), "sid") is None
        assert read_cookie(_request(), "sid") is None

    def test_object_without_cookies(self):
        assert read_cookie(object(), "sid") is None


class TestWriteCookie:
    def test_full_cookie_header(self):
        response = Response()
        opts = SessionOptions(
            path="/app", domain="example.com", max_age=60, secure=True, http_only=True, same_site=SameSite.LAX
        )
        write_cookie(response, new_cookie("sid", "abc-123", opts))
        header = response.headers["set-cookie"]
        assert header.startswith("sid=abc-123;")
        assert "Max-Age=60" in header
        assert "Path=/app" in header
        assert "Domain=example.com" in header
        assert "Secure" in header
        assert "HttpOnly" in header
        assert "SameSite=lax" in header

    def test_default_same_site_omits_attribute(self):
        response = Response()
        write_cookie(response, new_cookie("sid", "abc", SessionOptions(max_age=0)))
        header = response.headers["set-cookie"]
        assert "SameSite" not in header
        assert "Max-Age" not in header
        assert "Domain" not in header

    def test_expired_cookie(self):
        response = Response()
        write_cookie(response, new_cookie("sid", "", SessionOptions(max_age=-1)))
        header = response.headers["set-cookie"]
        assert header.startswith("sid=")
        assert "Max-Age=0" in header
        assert "01 Jan 1970 00:00:01 GMT" in header
