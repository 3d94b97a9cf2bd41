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
"""CsrfAuthenticityFilter — rejects unsafe requests without a checksum-valid token.

The presented token comes from the ``X-CSRF-Token`` header or, for form
submissions, the ``authenticity_token`` field. It is verified directly
against the ``csrf_checksum`` cookie with the shared secret. Because the
checksum cookie is HttpOnly and only a backend can compute it, a match
proves the caller could read the token cookie of the protected domain.

Rejection raises :class:`InvalidAuthenticityException`. The filter never
touches cookies; :class:`CsrfIssuanceFilter` puts a fresh pair on the
resulting error response.
"""

from __future__ import annotations

from typing import NoReturn

import structlog
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request
from starlette.responses import Response

from sharedcsrf.container.ordering import HIGHEST_PRECEDENCE, order
from sharedcsrf.kernel.exceptions import InvalidAuthenticityException, MalformedCookieException
from sharedcsrf.security.checksum import verify_checksum
from sharedcsrf.security.cookies import (
    CHECKSUM_COOKIE_NAME,
    CSRF_FORM_FIELD,
    CSRF_HEADER_NAME,
    SAFE_METHODS,
    is_well_formed_checksum,
)
from sharedcsrf.security.properties import CsrfProperties
from sharedcsrf.security.secret import SharedSecretKey
from sharedcsrf.security.tokens import is_well_formed_token
from sharedcsrf.web.filters import OncePerRequestFilter
from sharedcsrf.web.ports.filter import CallNext

logger = structlog.get_logger("sharedcsrf.web")

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@order(HIGHEST_PRECEDENCE + 200)
class CsrfAuthenticityFilter(OncePerRequestFilter):
    """Gates unsafe methods on a token that matches the checksum cookie.

    Ordering: runs inside :class:`CsrfIssuanceFilter` so that issuance
    observes every rejection.
    """

    def __init__(self, key: SharedSecretKey, properties: CsrfProperties | None = None) -> None:
        self._key = key
        self._properties = properties or CsrfProperties()
        self.exclude_patterns = list(self._properties.exclude_patterns)

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        if request.method in SAFE_METHODS:
            return await call_next(request)

        if self._properties.bearer_bypass:
            auth_header: str | None = request.headers.get("authorization")
            if auth_header and auth_header.startswith("Bearer "):
                return await call_next(request)

        presented = await self._presented_token(request)
        checksum: str | None = request.cookies.get(CHECKSUM_COOKIE_NAME) or None

        if presented is None:
            self._reject(request, "missing_token")
        elif checksum is None:
            self._reject(request, "missing_checksum")
        elif not is_well_formed_token(presented) or not is_well_formed_checksum(checksum):
            self._reject(request, "malformed_cookie", MalformedCookieException())
        elif not verify_checksum(presented, checksum, self._key):
            self._reject(request, "checksum_mismatch")

        return await call_next(request)

    async def _presented_token(self, request: Request) -> str | None:
        """Extract the presented token: header first, then the form field."""
        header: str | None = request.headers.get(CSRF_HEADER_NAME)
        if header:
            return header

        if not self._properties.form_field_enabled:
            return None

        content_type: str = request.headers.get("content-type", "").lower()
        if not content_type.startswith(_FORM_CONTENT_TYPES):
            return None

        try:
            # Buffer the body so the filter chain can replay it downstream.
            await request.body()
            form = await request.form()
        except (HTTPException, MultiPartException):
            return None

        try:
            value = form.get(CSRF_FORM_FIELD)
        finally:
            await form.close()
        return value if isinstance(value, str) and value else None

    def _reject(
        self,
        request: Request,
        reason: str,
        exc: InvalidAuthenticityException | None = None,
    ) -> NoReturn:
        logger.warning(
            "csrf_authenticity_rejected",
            method=request.method,
            path=request.url.path,
            reason=reason,
        )
        raise exc or InvalidAuthenticityException()
