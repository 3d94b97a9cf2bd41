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
"""Unpadded URL-safe base64 (RFC 4648 section 5).

Every value that travels in a CSRF cookie or header is encoded with this
codec. Padding is stripped on encode and never expected on decode.
"""

from __future__ import annotations

import base64
import binascii
import re

from sharedcsrf.kernel.exceptions import DecodeError

_ALPHABET_RE = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode *data* as unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(value: str) -> bytes:
    """Decode unpadded URL-safe base64.

    Raises:
        DecodeError: *value* contains characters outside the URL-safe
            alphabet (padding included) or has a length no encoding produces.
    """
    if not _ALPHABET_RE.fullmatch(value):
        raise DecodeError("Invalid base64url alphabet")
    if len(value) % 4 == 1:
        raise DecodeError("Invalid base64url length")
    try:
        return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))
    except binascii.Error as exc:
        raise DecodeError("Invalid base64url input") from exc
