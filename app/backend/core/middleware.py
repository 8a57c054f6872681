"""Request logging middleware."""

import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Log every request on arrival and its response status with the elapsed time."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.monotonic()
        logger.info(f"{request.method} {request.path} - Request received")

        response = self.get_response(request)

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(f"{request.method} {request.path} - Response: {response.status_code} ({duration_ms}ms)")
        return response
