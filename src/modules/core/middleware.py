"""Request correlation for structured logs.

Every request gets an id, taken from the ``X-Request-ID`` header or freshly
generated, that is bound into structlog's context for the lifetime of the
request and echoed back in the response header.
"""

from __future__ import annotations

import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Bind ``correlation_id`` to every log line emitted while serving a request.

    The binding is undone when the request finishes, including when the
    view raises, so ids never leak into the next request on the thread.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        with structlog.contextvars.bound_contextvars(correlation_id=cid):
            logger.info(
                "request.started",
                method=request.method,
                path=request.get_full_path(),
            )
            response = self.get_response(request)
            logger.info(
                "request.finished",
                method=request.method,
                path=request.get_full_path(),
                status_code=response.status_code,
            )

        response[REQUEST_ID_HEADER] = cid
        return response
