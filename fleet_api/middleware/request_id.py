"""
Fleet API — Request ID Middleware
==================================

What:  Assigns an ID to each incoming request and returns it in `X-Request-ID`.
Why:   Every log line and every error body of a request carries the same ID,
       so a client-reported error can be matched to server logs.
How:   Reuses a client-supplied `X-Request-ID`, otherwise generates a short UUID;
       stores it in a ContextVar and on `request.state`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars is enough for correlation and readable in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
