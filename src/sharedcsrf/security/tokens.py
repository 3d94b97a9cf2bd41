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
"""CSRF token generation and shape checks."""

from __future__ import annotations

import secrets

from sharedcsrf.kernel.exceptions import DecodeError
from sharedcsrf.security import codec

TOKEN_BYTES: int = 24
"""Random bytes per generated token (32 characters once encoded)."""

MIN_TOKEN_BYTES: int = 16
"""Smallest decoded token accepted from another backend."""

MAX_TOKEN_LENGTH: int = 256
"""Longest encoded token accepted before any HMAC work is done."""


def generate_token() -> str:
    """Generate a new CSRF token from the operating system's CSPRNG.

    Returns:
        A 32-character unpadded URL-safe base64 string.
    """
    return codec.encode(secrets.token_bytes(TOKEN_BYTES))


def is_well_formed_token(token: str) -> bool:
    """Return ``True`` if *token* could have been minted by a cooperating backend."""
    if not token or len(token) > MAX_TOKEN_LENGTH:
        return False
    try:
        return len(codec.decode(token)) >= MIN_TOKEN_BYTES
    except DecodeError:
        return False
