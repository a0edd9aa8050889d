# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request context middleware.

Binds a request id, the method and the path to the logging context so
every record emitted while handling a request carries them. The id is
taken from the X-Request-ID header when the client sends one and echoed
back on the response.

Example:
    # Request
    POST /asignar-grados-iniciales
    X-Request-ID: 3f2c9a1b

    # Every log line of that request includes request_id=3f2c9a1b
"""

import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths not worth a completion log line
QUIET_PATHS = frozenset({"/health", "/ready"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware binding per-request logging context."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Bind the context, run the request and log its outcome.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler.

        Returns:
            HTTP response with the request id header set.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex[:16]
        request.state.request_id = request_id

        clear_context()
        bind_context(request_id=request_id, method=request.method, path=request.url.path)
        start = time.perf_counter()

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            if request.url.path not in QUIET_PATHS:
                logger.info(
                    "Request completed: status=%d, duration_ms=%.1f",
                    response.status_code,
                    duration_ms,
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()
