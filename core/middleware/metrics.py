"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import re
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import http_request_duration_seconds, http_requests_total

# Keys, versions and machine ids would explode label cardinality.
_PATH_PARAMS = [
    (re.compile(r"MACMAN-[A-Z0-9]{5}-[A-Z0-9]{5}-[A-Z0-9]{5}"), "{license_key}"),
    (re.compile(r"/download/[^/]+"), "/download/{version}"),
    (re.compile(r"/devices/[^/]+"), "/devices/{machine_id}"),
    (re.compile(r"/updates/\d[^/]*/"), "/updates/{version}/"),
]


def normalize_endpoint(path: str) -> str:
    """Replace path parameters with placeholders."""
    for pattern, placeholder in _PATH_PARAMS:
        path = pattern.sub(placeholder, path)
    return path


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        start_time = time.time()
        endpoint = normalize_endpoint(request.path)
        status_code = 500

        try:
            response = self.get_response(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code,
            ).inc()
            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint,
            ).observe(time.time() - start_time)
