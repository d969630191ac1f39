"""
Prometheus metrics middleware for HTTP request tracking.

Tracks request duration, status codes and in-progress requests. Path
segments that are ULIDs are collapsed to ``:id`` to bound label cardinality.
"""

import re
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import ULID_PATH_PATTERN
from ..monitoring.prometheus_metrics import prometheus_metrics

_ULID_SEGMENT = re.compile(ULID_PATH_PATTERN)


def normalize_path(raw_path: str) -> str:
    """/tuitions/01J...XYZ -> /tuitions/:id"""
    return "/".join(
        ":id" if segment.isdigit() or _ULID_SEGMENT.match(segment.upper()) else segment
        for segment in raw_path.split("/")
    )


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics collection for the metrics endpoint itself
        if request.url.path == "/metrics/prometheus":
            return await call_next(request)

        method = request.method
        path = normalize_path(request.url.path)

        prometheus_metrics.track_http_request_start(method, path)
        start_time = time.time()

        try:
            response = await call_next(request)
            duration = time.time() - start_time

            prometheus_metrics.record_http_request(
                method=method, endpoint=path, duration=duration, status_code=response.status_code
            )

            return response

        finally:
            # Always track request end
            prometheus_metrics.track_http_request_end(method, path)
