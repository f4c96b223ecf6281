"""API middleware: per-request log fields, session correlation and timing."""

import logging
import re
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from admin_assistant.observability.context import session_context
from admin_assistant.observability.logging import LogContext
from admin_assistant.observability.tracing import add_span_attribute, get_current_trace_id

logger = logging.getLogger(__name__)

SESSION_PATH_PATTERN = re.compile(r"^/v1/sessions/(?P<session_id>[^/]+)")


def session_id_from_path(path: str) -> str | None:
    """Session id addressed by a /v1/sessions/{id}/... path, if any."""
    match = SESSION_PATH_PATTERN.match(path)
    return match.group("session_id") if match else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with its timing.

    Everything logged while the request is handled carries the request id,
    and requests addressed to a session also carry its session id.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        session_id = session_id_from_path(request.url.path)

        add_span_attribute("http.request_id", request_id)
        if session_id:
            add_span_attribute("session.id", session_id)

        fields = {"request_id": request_id, "method": request.method, "path": request.url.path}
        with LogContext(**fields):
            if session_id:
                with session_context(session_id):
                    return await self._timed(request, call_next, request_id, session_id)
            return await self._timed(request, call_next, request_id, None)

    async def _timed(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
        request_id: str,
        session_id: str | None,
    ) -> Response:
        trace_id = get_current_trace_id()
        start_time = time.perf_counter()
        logger.info("Request started")

        try:
            response = await call_next(request)
        except Exception as e:
            processing_time = int((time.perf_counter() - start_time) * 1000)
            logger.error("Request failed after %dms: %s", processing_time, e)
            raise

        processing_time = int((time.perf_counter() - start_time) * 1000)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time-Ms"] = str(processing_time)
        if session_id:
            response.headers["X-Session-ID"] = session_id
        if trace_id:
            response.headers["X-Trace-ID"] = trace_id

        logger.info("Request completed: %d in %dms", response.status_code, processing_time)
        return response
