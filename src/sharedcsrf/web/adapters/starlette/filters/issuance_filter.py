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
"""CsrfIssuanceFilter — keeps a valid token/checksum cookie pair on every response.

Runs on every request, before (and therefore around) the authenticity
filter and the route handler:

* **Valid inbound pair**: cookies are left untouched and the inbound token
  is exposed as ``request.state.csrf_token``.
* **Absent, partial or invalid pair**: a fresh pair is minted up front (so
  the handler can embed the new token), and both cookies are set on the
  outgoing response together.

Handler errors and authenticity rejections are rendered into an error
response here, so even those responses carry the fresh pair. This filter
never judges whether a request is legitimate.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import Response

from sharedcsrf.container.ordering import HIGHEST_PRECEDENCE, order
from sharedcsrf.kernel.exceptions import SharedCsrfException
from sharedcsrf.security.cookies import CHECKSUM_COOKIE_NAME, TOKEN_COOKIE_NAME, CookiePair
from sharedcsrf.security.properties import CsrfProperties
from sharedcsrf.security.secret import SharedSecretKey
from sharedcsrf.web.errors import global_exception_handler
from sharedcsrf.web.filters import OncePerRequestFilter
from sharedcsrf.web.ports.filter import CallNext

logger = structlog.get_logger("sharedcsrf.web")

ErrorRenderer = Callable[[Any, Exception], Awaitable[Response]]


def get_csrf_token(request: Any) -> str | None:
    """Return the valid CSRF token for this request, for embedding in pages."""
    return getattr(request.state, "csrf_token", None)


def set_csrf_cookies(
    response: Any,
    pair: CookiePair,
    secure: bool = True,
    domain: str | None = None,
) -> None:
    """Set both cookies of *pair* on *response*."""
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=pair.token,
        path="/",
        domain=domain,
        secure=secure,
        httponly=False,  # the frontend reads it to build the X-CSRF-Token header
        samesite="strict",
    )
    response.set_cookie(
        key=CHECKSUM_COOKIE_NAME,
        value=pair.checksum,
        path="/",
        domain=domain,
        secure=secure,
        httponly=True,
        samesite="strict",
    )


@order(HIGHEST_PRECEDENCE + 100)
class CsrfIssuanceFilter(OncePerRequestFilter):
    """Issues a fresh cookie pair whenever the inbound one is not valid."""

    def __init__(
        self,
        key: SharedSecretKey,
        properties: CsrfProperties | None = None,
        error_renderer: ErrorRenderer = global_exception_handler,
    ) -> None:
        self._key = key
        self._properties = properties or CsrfProperties()
        self._render_error = error_renderer

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        inbound = CookiePair.from_cookies(request.cookies)
        issued: CookiePair | None = None

        if inbound.is_valid(self._key):
            request.state.csrf_token = inbound.token
        else:
            issued = CookiePair.issue(self._key)
            request.state.csrf_token = issued.token

        try:
            response = await call_next(request)
        except Exception as exc:
            if not isinstance(exc, SharedCsrfException):
                logger.exception(
                    "http_request_failed",
                    method=request.method,
                    path=request.url.path,
                    error_type=type(exc).__name__,
                )
            response = await self._render_error(request, exc)

        if issued is not None:
            set_csrf_cookies(
                response,
                issued,
                secure=self._properties.cookie_secure,
                domain=self._properties.cookie_domain,
            )
            logger.info(f"Set CSRF token: {issued.token}")

        return response
