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
"""Shared fixtures for sharedcsrf tests."""

from __future__ import annotations

import pytest
import structlog

from sharedcsrf.security.properties import CsrfProperties
from sharedcsrf.security.secret import SharedSecretKey

TEST_SECRET = "9f1c2b7e4a5d6c8b0e3f2a1d4c7b6e5f8a9b0c1d2e3f4a5b6c7d8e9f0a1b2c3d"


@pytest.fixture
def secret_hex() -> str:
    return TEST_SECRET


@pytest.fixture
def key() -> SharedSecretKey:
    return SharedSecretKey.from_hex(TEST_SECRET)


@pytest.fixture
def properties() -> CsrfProperties:
    # TestClient talks plain http, so Secure cookies would never be sent back.
    return CsrfProperties(secret=TEST_SECRET, cookie_secure=False)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
