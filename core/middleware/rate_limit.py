"""
Rate limiting middleware.

Implements fixed-window rate limiting per client IP, stored in the
Django cache. Two tiers apply:
- every /api/ request: RATE_LIMIT_MAX_REQUESTS per RATE_LIMIT_WINDOW_SECONDS
- license validation: the stricter LICENSE_VALIDATION_RATE_LIMIT_* limit
"""

import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total

VALIDATION_PATHS = ("/api/licenses/validate", "/api/validate-key")


class RateLimitMiddleware:
    """
    Rate limiting middleware per client IP.

    Disabled entirely when ``settings.RATE_LIMIT_ENABLED`` is False.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def _client_ip(self, request: HttpRequest) -> str:
        """
        Identify the client for rate limiting.

        X-Forwarded-For is only read behind RATE_LIMIT_TRUSTED_PROXY_COUNT
        proxies, and then only the entry the outermost trusted proxy appended.
        Entries to its left are client-supplied.
        """
        remote_addr = request.META.get("REMOTE_ADDR", "unknown")
        proxy_count = getattr(settings, "RATE_LIMIT_TRUSTED_PROXY_COUNT", 0)
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if proxy_count <= 0 or not forwarded:
            return remote_addr

        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        if len(hops) < proxy_count:
            return remote_addr
        return hops[-proxy_count]

    def _check_rate_limit(
        self, scope: str, client: str, limit: int, window: int
    ) -> Tuple[bool, int, int]:
        """
        Count a request against a fixed window.

        Args:
            scope: Limit tier name
            client: Client identifier
            limit: Requests allowed per window
            window: Window length in seconds

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() // window)
        reset_time = (window_start + 1) * window
        key = f"rate_limit:{scope}:{client}:{window_start}"

        if cache.add(key, 1, timeout=window):
            count = 1
        else:
            try:
                count = cache.incr(key)
            except ValueError:
                # Expired between add() and incr()
                cache.set(key, 1, timeout=window)
                count = 1

        if count > limit:
            return False, 0, reset_time
        return True, limit - count, reset_time

    def _tiers(self, path: str):
        tiers = [
            (
                "api",
                settings.RATE_LIMIT_MAX_REQUESTS,
                settings.RATE_LIMIT_WINDOW_SECONDS,
            )
        ]
        if path.rstrip("/") in VALIDATION_PATHS:
            tiers.append(
                (
                    "validate",
                    settings.LICENSE_VALIDATION_RATE_LIMIT_MAX_REQUESTS,
                    settings.LICENSE_VALIDATION_RATE_LIMIT_WINDOW_SECONDS,
                )
            )
        return tiers

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not getattr(settings, "RATE_LIMIT_ENABLED", True):
            return self.get_response(request)

        if not request.path.startswith("/api/") or request.path.startswith(
            ("/api/docs", "/api/redoc", "/api/schema")
        ):
            return self.get_response(request)

        client = self._client_ip(request)
        headers = None
        for scope, limit, window in self._tiers(request.path):
            is_allowed, remaining, reset_time = self._check_rate_limit(
                scope, client, limit, window
            )
            # The strictest tier checked last wins the headers.
            headers = (limit, remaining, reset_time)
            if not is_allowed:
                errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
                response = JsonResponse(
                    {
                        "error": {
                            "code": "RATE_LIMIT_EXCEEDED",
                            "message": "Too many requests. Please try again later.",
                        }
                    },
                    status=429,
                )
                break
        else:
            response = self.get_response(request)

        limit, remaining, reset_time = headers
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if response.status_code == 429:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))
        return response
