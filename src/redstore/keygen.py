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
"""Session identifier generators."""

from __future__ import annotations

import secrets
import uuid
from typing import Protocol, runtime_checkable

ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-"
ID_LENGTH = 64


@runtime_checkable
class KeyGenerator(Protocol):
    """Produces identifiers used as session keys."""

    def generate(self) -> str: ...


class SecureKeyGenerator:
    """Fixed-length identifiers drawn uniformly from *alphabet*.

    Every character comes from :func:`secrets.choice`, i.e. the operating
    system CSPRNG.  If that source is unavailable the error propagates; there
    is no fallback to :mod:`random`.
    """

    def __init__(self, length: int = ID_LENGTH, alphabet: str = ID_ALPHABET) -> None:
        if length < 1:
            raise ValueError(f"identifier length must be positive, got {length}")
        if len(set(alphabet)) < 2:
            raise ValueError("identifier alphabet needs at least two distinct characters")
        self._length = length
        self._alphabet = alphabet

    @property
    def length(self) -> int:
        return self._length

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def generate(self) -> str:
        return "".join(secrets.choice(self._alphabet) for _ in range(self._length))


class UuidKeyGenerator:
    """Random UUID4 identifiers rendered as 32 hex characters."""

    def generate(self) -> str:
        return uuid.uuid4().hex
