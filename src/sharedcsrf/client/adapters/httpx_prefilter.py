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
"""httpx-based frontend prefilter for Python consumers of protected backends.

Before every unsafe request, the token is read from the client's live
cookie jar and sent verbatim as ``X-CSRF-Token``. Nothing is cached
between requests, so a pair re-issued on an error response is picked up
by the very next request.

Usage::

    client = httpx.Client(base_url="https://app.example.com")
    client.auth = CsrfHeaderAuth(client.cookies)
"""

from __future__ import annotations

from collections.abc import Generator

import httpx

from sharedcsrf.security.cookies import CSRF_HEADER_NAME, SAFE_METHODS, TOKEN_COOKIE_NAME


class CsrfHeaderAuth(httpx.Auth):
    """Sets ``X-CSRF-Token`` from the ``csrf_token`` cookie on unsafe requests."""

    def __init__(self, cookies: httpx.Cookies) -> None:
        self._cookies = cookies

    def current_token(self) -> str | None:
        """Read the token cookie from the jar as it is right now."""
        for cookie in self._cookies.jar:
            if cookie.name == TOKEN_COOKIE_NAME and cookie.value:
                return cookie.value
        return None

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if request.method.upper() not in SAFE_METHODS:
            token = self.current_token()
            if token:
                request.headers[CSRF_HEADER_NAME] = token
            else:
                request.headers.pop(CSRF_HEADER_NAME, None)
        yield request
