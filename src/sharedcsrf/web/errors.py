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
"""Global exception handler — structured JSON error responses.

Authenticity failures become ``400`` with a fixed message and
``retryable: true`` so the frontend can resubmit; the reason for the
rejection is never included. Everything else is an opaque ``500``.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from sharedcsrf.kernel.exceptions import InvalidAuthenticityException


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all exceptions with structured JSON responses."""
    if isinstance(exc, InvalidAuthenticityException):
        # Same body for every authenticity failure, malformed cookies included.
        status, message, code = 400, "Invalid authenticity token", "INVALID_AUTHENTICITY"
    else:
        status, message, code = 500, "Internal server error", "INTERNAL_ERROR"

    body: dict[str, Any] = {
        "error": {
            "message": message,
            "code": code,
            "request_id": str(uuid.uuid4()),
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status,
            "path": request.url.path,
            "retryable": status == 400,
        }
    }
    return JSONResponse(body, status_code=status)
