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
"""Typed configuration property classes."""

from __future__ import annotations

from dataclasses import dataclass

from redstore.config import config_properties


@config_properties(prefix="redstore.redis")
@dataclass
class RedisProperties:
    """Connection settings for the Redis backend (redstore.redis.*)."""

    url: str = "redis://localhost:6379/0"
    username: str = ""
    password: str = ""
    socket_timeout: float = 5.0


@config_properties(prefix="redstore.session")
@dataclass
class SessionProperties:
    """Session cookie and storage settings (redstore.session.*)."""

    cookie_name: str = "id"
    path: str = "/"
    domain: str = ""
    max_age: int = 0
    secure: bool = False
    http_only: bool = True
    same_site: str = "default"
    key_prefix: str = "session:"
    key_generator: str = "secure"
    serializer: str = "pickle"
    regenerate_unknown_ids: bool = False


@config_properties(prefix="redstore.logging")
@dataclass
class LoggingProperties:
    """Logging settings (redstore.logging.*).

    ``level`` is a level name or a map of logger name to level with a
    ``root`` entry.
    """

    level: str | dict[str, str] = "INFO"
    format: str = "console"
