"""
Request id middleware - tags each request for log correlation.
"""

import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from .request_id import REQUEST_ID_HEADER, generate_request_id, request_id_var

logger = logging.getLogger(__name__)


class RequestIDMiddleware:
    """
    Middleware that binds a request id to the current context.

    The id is taken from the X-Request-ID header when the caller sends one,
    otherwise generated. It is echoed back on the response and attached to
    every log record emitted while the request is handled.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        token = request_id_var.set(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]
        try:
            logger.debug("%s %s", request.method, request.path)
            response = self.get_response(request)
        finally:
            request_id_var.reset(token)

        response[REQUEST_ID_HEADER] = request_id
        return response
