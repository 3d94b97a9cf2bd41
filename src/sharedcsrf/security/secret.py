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
"""SharedSecretKey — the HMAC key shared by every cooperating backend.

The secret is 32 random bytes delivered as 64 hex characters. The HMAC key
is the UTF-8 encoding of that text exactly as delivered; it is never
hex-decoded. Every backend sharing the secret, in any language, must use
the same convention or no checksum will ever verify.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sharedcsrf.kernel.exceptions import MalformedSecretException, MissingSecretException

if TYPE_CHECKING:
    from sharedcsrf.security.properties import CsrfProperties

SECRET_BYTES: int = 32
SECRET_HEX_LENGTH: int = SECRET_BYTES * 2


def generate_secret_hex() -> str:
    """Generate a new secret suitable for ``sharedcsrf.csrf.secret``."""
    return secrets.token_hex(SECRET_BYTES)


@dataclass(frozen=True)
class SharedSecretKey:
    """Immutable HMAC key, created once at process start."""

    key: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not self.key:
            raise MissingSecretException("CSRF shared secret is empty", code="MISSING_SECRET")

    @classmethod
    def from_text(cls, text: str) -> SharedSecretKey:
        """Build a key from arbitrary secret text, without shape checks."""
        return cls(text.encode("utf-8"))

    @classmethod
    def from_hex(cls, text: str | None) -> SharedSecretKey:
        """Build a key from the 64-character hex delivery form.

        Raises:
            MissingSecretException: *text* is ``None`` or blank.
            MalformedSecretException: *text* is not 64 hex characters.
        """
        if text is None or not text.strip():
            raise MissingSecretException(
                "CSRF shared secret is not configured (sharedcsrf.csrf.secret / SHAREDCSRF_CSRF_SECRET)",
                code="MISSING_SECRET",
            )
        text = text.strip()
        if len(text) != SECRET_HEX_LENGTH or any(c not in string.hexdigits for c in text):
            raise MalformedSecretException(
                f"CSRF shared secret must be {SECRET_HEX_LENGTH} hex characters",
                code="MALFORMED_SECRET",
                context={"length": len(text)},
            )
        return cls.from_text(text)

    @classmethod
    def from_properties(cls, properties: CsrfProperties) -> SharedSecretKey:
        """Build the key from bound :class:`CsrfProperties`."""
        return cls.from_hex(properties.secret)
