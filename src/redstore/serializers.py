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
"""Session value serializers.

A serializer turns the ``values`` mapping of a session into the byte payload
written to the cache and back.  Encoding problems raise
:class:`~redstore.errors.SerializationError`; a payload that cannot be decoded
raises :class:`~redstore.errors.CorruptSessionError`.  A missing payload is a
cache condition and never reaches a serializer.
"""

from __future__ import annotations

import json
import pickle
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from redstore.errors import CorruptSessionError, SerializationError


@runtime_checkable
class SessionSerializer(Protocol):
    """Codec between session values and the stored payload."""

    def serialize(self, values: Mapping[Any, Any]) -> bytes: ...

    def deserialize(self, data: bytes) -> dict[Any, Any]: ...


class PickleSerializer:
    """Structure-preserving binary encoding of the whole values mapping.

    Non-string keys, tuples, sets, datetimes and nested containers all
    round-trip.  Payloads are only ever produced by the store itself, so the
    cache must not be writable by untrusted parties.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def serialize(self, values: Mapping[Any, Any]) -> bytes:
        try:
            return pickle.dumps(dict(values), protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as exc:
            raise SerializationError(f"failed to encode session values: {exc}") from exc

    def deserialize(self, data: bytes) -> dict[Any, Any]:
        try:
            decoded = pickle.loads(data)  # noqa: S301
        except Exception as exc:
            raise CorruptSessionError(f"failed to decode session payload: {exc}") from exc
        if not isinstance(decoded, dict):
            raise CorruptSessionError(f"session payload decoded to {type(decoded).__name__}, expected dict")
        return decoded


class JsonSerializer:
    """Compact UTF-8 JSON encoding.

    Readable by non-Python services, at the cost of JSON's type model: keys
    must be strings and tuples come back as lists.
    """

    def serialize(self, values: Mapping[Any, Any]) -> bytes:
        try:
            return json.dumps(dict(values), separators=(",", ":")).encode()
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"failed to encode session values: {exc}") from exc

    def deserialize(self, data: bytes) -> dict[Any, Any]:
        try:
            decoded = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptSessionError(f"failed to decode session payload: {exc}") from exc
        if not isinstance(decoded, dict):
            raise CorruptSessionError(f"session payload decoded to {type(decoded).__name__}, expected dict")
        return decoded
