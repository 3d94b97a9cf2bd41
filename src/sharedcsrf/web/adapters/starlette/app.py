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
"""sharedcsrf web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from sharedcsrf.container.ordering import get_order
from sharedcsrf.core.config import Config
from sharedcsrf.logging.structlog_adapter import StructlogAdapter
from sharedcsrf.security.properties import CsrfProperties
from sharedcsrf.security.secret import SharedSecretKey
from sharedcsrf.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from sharedcsrf.web.adapters.starlette.filters import CsrfAuthenticityFilter, CsrfIssuanceFilter
from sharedcsrf.web.errors import global_exception_handler
from sharedcsrf.web.ports.filter import WebFilter


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    key: SharedSecretKey | None = None,
    properties: CsrfProperties | None = None,
    config: Config | None = None,
    filters: Sequence[WebFilter] = (),
    debug: bool = False,
    lifespan: Any = None,
) -> Starlette:
    """Create a Starlette application protected by the shared CSRF protocol.

    The shared secret is resolved once, here: from *key* if given, otherwise
    from *properties*, otherwise from *config* (``sharedcsrf.csrf.*``). A
    missing or malformed secret raises before any request is served.

    When *config* is given, logging is configured from it as well.

    Includes:
    - WebFilter chain (issuance, authenticity, + caller filters, sorted by @order)
    - Global exception handler (structured JSON errors)
    """
    if config is not None:
        StructlogAdapter().configure(config)
        if properties is None:
            properties = config.bind(CsrfProperties)

    properties = properties or CsrfProperties()
    if key is None:
        key = SharedSecretKey.from_properties(properties)

    chain: list[WebFilter] = [
        CsrfIssuanceFilter(key, properties),
        CsrfAuthenticityFilter(key, properties),
        *filters,
    ]
    chain.sort(key=lambda f: get_order(type(f)))

    return Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        exception_handlers={Exception: global_exception_handler},
        lifespan=lifespan,
    )
