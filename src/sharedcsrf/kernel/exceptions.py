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
"""Exception hierarchy for sharedcsrf.

All errors derive from :class:`SharedCsrfException`, which carries an optional
machine-readable code and a context dict. Configuration errors are fatal and
only ever raised at process start; security errors are per-request and are
rendered by the web layer as client errors.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class SharedCsrfException(Exception):
    """Base exception for all sharedcsrf errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_AUTHENTICITY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions (startup only)
# =============================================================================


class ConfigurationException(SharedCsrfException):
    """The process cannot start with the configuration it was given."""


class MissingSecretException(ConfigurationException):
    """No shared secret key was delivered to the process."""


class MalformedSecretException(ConfigurationException):
    """The shared secret key does not have the expected shape."""


# =============================================================================
# Codec Exceptions
# =============================================================================


class DecodeError(SharedCsrfException, ValueError):
    """Input is not valid unpadded URL-safe base64."""


# =============================================================================
# Security Exceptions (per request)
# =============================================================================


class SecurityException(SharedCsrfException):
    """Request authenticity errors."""


class InvalidAuthenticityException(SecurityException):
    """The request did not carry a token matching the checksum cookie."""

    def __init__(
        self,
        message: str = "Invalid authenticity token",
        code: str | None = "INVALID_AUTHENTICITY",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


class MalformedCookieException(InvalidAuthenticityException):
    """A CSRF cookie has the wrong encoding or length."""
