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
"""CSRF configuration properties (sharedcsrf.csrf.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from sharedcsrf.core.config import config_properties


@config_properties(prefix="sharedcsrf.csrf")
@dataclass
class CsrfProperties:
    """Configuration for cookie issuance and the authenticity filter.

    Attributes:
        secret: Shared secret, 64 hex characters, identical on every backend
            of an environment.
        cookie_secure: Set the ``Secure`` flag on both cookies (TLS environments).
        cookie_domain: Cookie ``Domain`` attribute, for backends on sibling subdomains.
        form_field_enabled: Accept ``authenticity_token`` from form bodies.
        bearer_bypass: Skip the authenticity check for ``Authorization: Bearer`` requests.
        exclude_patterns: Glob paths exempt from the authenticity check.
    """

    secret: str = ""
    cookie_secure: bool = True
    cookie_domain: str | None = None
    form_field_enabled: bool = True
    bearer_bypass: bool = False
    exclude_patterns: list[str] = field(default_factory=list)
