"""
Core views for health checks and system status.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)

SERVICE_NAME = "macman-backend"


def database_is_up() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError:
        logger.exception("Database health check failed")
        return False
    return True


def cache_is_up() -> bool:
    try:
        cache.set("health_check", "ok", 10)
        return cache.get("health_check") == "ok"
    except Exception:  # pylint: disable=broad-exception-caught
        # Cache backends raise their own client errors (redis, memcached).
        logger.exception("Cache health check failed")
        return False


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness endpoint."""

    def get(self, _request):
        return JsonResponse({"status": "healthy", "service": SERVICE_NAME})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        if database_is_up():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class HealthCacheView(View):
    """Cache health check endpoint."""

    def get(self, _request):
        if cache_is_up():
            return JsonResponse({"status": "healthy", "cache": "connected"})
        return JsonResponse({"status": "unhealthy", "cache": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        checks = {
            "database": database_is_up(),
            "cache": cache_is_up(),
        }
        all_healthy = all(checks.values())
        return JsonResponse(
            {"status": "ready" if all_healthy else "not_ready", "checks": checks},
            status=200 if all_healthy else 503,
        )
