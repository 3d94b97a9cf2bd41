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
"""Checksum computation and constant-time verification.

``checksum = base64url(HMAC-SHA256(key, token))`` where *token* is the
wire-form string, UTF-8 encoded. The function is pure: no nonce and no
timestamp, so any backend holding the key reproduces the same checksum.

Known-answer vector::

    compute_checksum("such protect", SharedSecretKey.from_text("much secure"))
    == "fEFyEXot47K5knjFe7MB-CKW4q99a7BmP9rKwrxf9Qk"
"""

from __future__ import annotations

import hashlib
import hmac

from sharedcsrf.security import codec
from sharedcsrf.security.secret import SharedSecretKey


def constant_time_equals(a: str, b: str) -> bool:
    """Compare two strings in time independent of where they first differ."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def compute_checksum(token: str, key: SharedSecretKey) -> str:
    """Return the checksum of *token* under *key*."""
    digest = hmac.new(key.key, token.encode("utf-8"), hashlib.sha256).digest()
    return codec.encode(digest)


def verify_checksum(token: str, checksum: str, key: SharedSecretKey) -> bool:
    """Return ``True`` if *checksum* is the checksum of *token* under *key*."""
    return constant_time_equals(compute_checksum(token, key), checksum)
