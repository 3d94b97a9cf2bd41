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
"""Tests for the global exception handler."""

from __future__ import annotations

import json
import uuid
from types import SimpleNamespace

import pytest

from sharedcsrf.kernel.exceptions import (
    InvalidAuthenticityException,
    MalformedCookieException,
    MissingSecretException,
    SecurityException,
)
from sharedcsrf.web.errors import global_exception_handler


def _make_request(path: str = "/api/orders") -> SimpleNamespace:
    return SimpleNamespace(url=SimpleNamespace(path=path))


async def _render(exc: Exception) -> tuple[int, dict]:
    response = await global_exception_handler(_make_request(), exc)
    return response.status_code, json.loads(response.body)["error"]


class TestGlobalExceptionHandler:
    @pytest.mark.asyncio
    async def test_invalid_authenticity_is_retryable_400(self):
        status, body = await _render(InvalidAuthenticityException())
        assert status == 400
        assert body["code"] == "INVALID_AUTHENTICITY"
        assert body["retryable"] is True
        assert body["path"] == "/api/orders"
        uuid.UUID(body["request_id"])

    @pytest.mark.asyncio
    async def test_request_ids_are_unique(self):
        _, first = await _render(InvalidAuthenticityException())
        _, second = await _render(InvalidAuthenticityException())
        assert first["request_id"] != second["request_id"]

    @pytest.mark.asyncio
    async def test_malformed_cookie_is_indistinguishable(self):
        _, plain = await _render(InvalidAuthenticityException())
        _, malformed = await _render(MalformedCookieException("bad base64 in csrf_checksum"))
        for field in ("message", "code", "status", "retryable"):
            assert malformed[field] == plain[field]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            RuntimeError("connection string with password"),
            SecurityException("password rotated", code="DENIED"),
            MissingSecretException("password missing"),
        ],
    )
    async def test_other_exceptions_hide_details(self, exc: Exception):
        status, body = await _render(exc)
        assert status == 500
        assert body["code"] == "INTERNAL_ERROR"
        assert body["retryable"] is False
        assert "password" not in body["message"]
