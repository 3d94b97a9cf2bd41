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
"""Tests for checksum computation and constant-time verification."""

from __future__ import annotations

import statistics
import time
from unittest.mock import patch

import pytest

from sharedcsrf.security import codec
from sharedcsrf.security.checksum import compute_checksum, constant_time_equals, verify_checksum
from sharedcsrf.security.secret import SharedSecretKey
from sharedcsrf.security.tokens import generate_token


class TestKnownAnswer:
    def test_conformance_vector(self) -> None:
        key = SharedSecretKey.from_text("much secure")
        assert compute_checksum("such protect", key) == "fEFyEXot47K5knjFe7MB-CKW4q99a7BmP9rKwrxf9Qk"

    def test_deterministic(self, key: SharedSecretKey) -> None:
        token = generate_token()
        assert compute_checksum(token, key) == compute_checksum(token, key)

    def test_checksum_shape(self, key: SharedSecretKey) -> None:
        checksum = compute_checksum(generate_token(), key)
        assert len(checksum) == 43
        assert len(codec.decode(checksum)) == 32

    def test_key_is_hex_text_not_decoded_bytes(self, secret_hex: str) -> None:
        token = generate_token()
        as_text = SharedSecretKey.from_hex(secret_hex)
        as_binary = SharedSecretKey(bytes.fromhex(secret_hex))
        assert compute_checksum(token, as_text) != compute_checksum(token, as_binary)
        assert as_text == SharedSecretKey(secret_hex.encode("utf-8"))


class TestVerifyChecksum:
    def test_accepts_own_checksum(self, key: SharedSecretKey) -> None:
        token = generate_token()
        assert verify_checksum(token, compute_checksum(token, key), key) is True

    def test_rejects_tampered_checksum(self, key: SharedSecretKey) -> None:
        token = generate_token()
        checksum = compute_checksum(token, key)
        tampered = ("B" if checksum[0] == "A" else "A") + checksum[1:]
        assert verify_checksum(token, tampered, key) is False

    def test_rejects_other_token(self, key: SharedSecretKey) -> None:
        checksum = compute_checksum(generate_token(), key)
        assert verify_checksum(generate_token(), checksum, key) is False

    def test_rejects_other_key(self, key: SharedSecretKey) -> None:
        token = generate_token()
        other = SharedSecretKey.from_text("another environment")
        assert verify_checksum(token, compute_checksum(token, other), key) is False

    def test_rejects_empty_checksum(self, key: SharedSecretKey) -> None:
        assert verify_checksum(generate_token(), "", key) is False


class TestConstantTimeEquals:
    def test_equal_and_unequal(self) -> None:
        assert constant_time_equals("abc", "abc")
        assert not constant_time_equals("abc", "abd")
        assert not constant_time_equals("abc", "abcd")

    def test_delegates_to_compare_digest(self, key: SharedSecretKey) -> None:
        token = generate_token()
        with patch("sharedcsrf.security.checksum.hmac.compare_digest", return_value=True) as mock:
            assert verify_checksum(token, "anything", key) is True
        mock.assert_called_once()

    def test_timing_independent_of_mismatch_offset(self, key: SharedSecretKey) -> None:
        expected = compute_checksum(generate_token(), key)

        def _flip(pos: int) -> str:
            return expected[:pos] + ("B" if expected[pos] == "A" else "A") + expected[pos + 1 :]

        early, late = _flip(0), _flip(len(expected) - 1)
        early_samples: list[float] = []
        late_samples: list[float] = []

        # Interleave samples so drift in machine load hits both sides equally.
        for _ in range(5000):
            start = time.perf_counter_ns()
            constant_time_equals(expected, early)
            early_samples.append(time.perf_counter_ns() - start)

            start = time.perf_counter_ns()
            constant_time_equals(expected, late)
            late_samples.append(time.perf_counter_ns() - start)

        early_median = statistics.median(early_samples)
        late_median = statistics.median(late_samples)
        assert late_median == pytest.approx(early_median, rel=0.5, abs=200)
