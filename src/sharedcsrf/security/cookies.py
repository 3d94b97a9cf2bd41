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
"""CookiePair — the (token, checksum) cookies as seen on a request.

A pair is *absent* (neither cookie), *partial* (exactly one), or *present*
(both), and a present pair is either valid or invalid. Partial pairs are
always invalid. Malformed values (bad encoding or length) are invalid too;
they are never reported differently from a plain mismatch.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass

from sharedcsrf.kernel.exceptions import DecodeError
from sharedcsrf.security import codec
from sharedcsrf.security.checksum import compute_checksum, verify_checksum
from sharedcsrf.security.secret import SharedSecretKey
from sharedcsrf.security.tokens import generate_token, is_well_formed_token

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
TOKEN_COOKIE_NAME: str = "csrf_token"
"""Script-readable cookie carrying the token."""

CHECKSUM_COOKIE_NAME: str = "csrf_checksum"
"""HttpOnly cookie carrying the checksum."""

CSRF_HEADER_NAME: str = "X-CSRF-Token"
"""Request header carrying the presented token."""

CSRF_FORM_FIELD: str = "authenticity_token"
"""Form field carrying the presented token for form-encoded submissions."""

SAFE_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})
"""HTTP methods that never require an authenticity check."""

CHECKSUM_BYTES: int = 32


class CookiePairState(enum.Enum):
    """Observed state of the inbound cookie pair."""

    NO_COOKIES = "no_cookies"
    PARTIAL_COOKIES = "partial_cookies"
    INVALID_PAIR = "invalid_pair"
    VALID_PAIR = "valid_pair"


def is_well_formed_checksum(checksum: str) -> bool:
    """Return ``True`` if *checksum* decodes to an HMAC-SHA256 digest."""
    try:
        return len(codec.decode(checksum)) == CHECKSUM_BYTES
    except DecodeError:
        return False


@dataclass(frozen=True)
class CookiePair:
    """A token cookie and a checksum cookie, either of which may be missing."""

    token: str | None = None
    checksum: str | None = None

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> CookiePair:
        """Read the pair from a request's cookies. Empty values count as missing."""
        return cls(
            token=cookies.get(TOKEN_COOKIE_NAME) or None,
            checksum=cookies.get(CHECKSUM_COOKIE_NAME) or None,
        )

    @classmethod
    def issue(cls, key: SharedSecretKey) -> CookiePair:
        """Mint a fresh, valid pair."""
        token = generate_token()
        return cls(token=token, checksum=compute_checksum(token, key))

    def is_valid(self, key: SharedSecretKey) -> bool:
        """Return ``True`` if both cookies are present, well formed and match."""
        if self.token is None or self.checksum is None:
            return False
        if not is_well_formed_token(self.token) or not is_well_formed_checksum(self.checksum):
            return False
        return verify_checksum(self.token, self.checksum, key)

    def state(self, key: SharedSecretKey) -> CookiePairState:
        """Classify the pair."""
        if self.token is None and self.checksum is None:
            return CookiePairState.NO_COOKIES
        if self.token is None or self.checksum is None:
            return CookiePairState.PARTIAL_COOKIES
        if self.is_valid(key):
            return CookiePairState.VALID_PAIR
        return CookiePairState.INVALID_PAIR
