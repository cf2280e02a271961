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
"""Tests for session identifier generators."""

import pytest

from redstore import keygen
from redstore.keygen import ID_ALPHABET, ID_LENGTH, KeyGenerator, SecureKeyGenerator, UuidKeyGenerator


class TestSecureKeyGenerator:
    def test_default_length_and_alphabet(self):
        session_id = SecureKeyGenerator().generate()
        assert len(session_id) == ID_LENGTH == 64
        assert set(session_id) <= set(ID_ALPHABET)

    def test_no_duplicates_in_large_sample(self):
        gen = SecureKeyGenerator()
        ids = {gen.generate() for _ in range(100_000)}
        assert len(ids) == 100_000

    def test_uses_full_alphabet(self):
        gen = SecureKeyGenerator()
        seen: set[str] = set()
        for _ in range(1_000):
            seen.update(gen.generate())
        assert seen == set(ID_ALPHABET)

    def test_custom_length_and_alphabet(self):
        gen = SecureKeyGenerator(length=8, alphabet="ab")
        session_id = gen.generate()
        assert len(session_id) == 8
        assert set(session_id) <= {"a", "b"}

    @pytest.mark.parametrize("length", [0, -1])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            SecureKeyGenerator(length=length)

    def test_rejects_degenerate_alphabet(self):
        with pytest.raises(ValueError):
            SecureKeyGenerator(alphabet="aaaa")

    def test_random_source_failure_propagates(self, monkeypatch):
        def _broken(_seq):
            raise OSError("no entropy")

        monkeypatch.setattr(keygen.secrets, "choice", _broken)
        with pytest.raises(OSError, match="no entropy"):
            SecureKeyGenerator().generate()


class TestUuidKeyGenerator:
    def test_hex_uuid(self):
        session_id = UuidKeyGenerator().generate()
        assert len(session_id) == 32
        int(session_id, 16)

    def test_distinct(self):
        gen = UuidKeyGenerator()
        assert gen.generate() != gen.generate()


class TestKeyGeneratorProtocol:
    def test_builtin_generators_conform(self):
        assert isinstance(SecureKeyGenerator(), KeyGenerator)
        assert isinstance(UuidKeyGenerator(), KeyGenerator)

    def test_duck_typed_generator_conforms(self):
        class _Fixed:
            def generate(self) -> str:
                return "fixed"

        assert isinstance(_Fixed(), KeyGenerator)
