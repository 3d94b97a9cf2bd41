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
"""CSRF protocol primitives: codec, tokens, shared secret, checksums, cookie pairs."""

from sharedcsrf.security.checksum import compute_checksum, constant_time_equals, verify_checksum
from sharedcsrf.security.cookies import (
    CHECKSUM_COOKIE_NAME,
    CSRF_FORM_FIELD,
    CSRF_HEADER_NAME,
    SAFE_METHODS,
    TOKEN_COOKIE_NAME,
    CookiePair,
    CookiePairState,
)
from sharedcsrf.security.properties import CsrfProperties
from sharedcsrf.security.secret import SharedSecretKey, generate_secret_hex
from sharedcsrf.security.tokens import generate_token

__all__ = [
    "CHECKSUM_COOKIE_NAME",
    "CSRF_FORM_FIELD",
    "CSRF_HEADER_NAME",
    "SAFE_METHODS",
    "TOKEN_COOKIE_NAME",
    "CookiePair",
    "CookiePairState",
    "CsrfProperties",
    "SharedSecretKey",
    "compute_checksum",
    "constant_time_equals",
    "generate_secret_hex",
    "generate_token",
    "verify_checksum",
]
