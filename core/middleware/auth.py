"""
Admin secret authentication middleware.

Admin endpoints are gated by a shared secret sent in the
``X-Admin-Secret`` header. Public endpoints (license validation, update
checks and downloads) need no credentials.
"""

import logging
import secrets
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

ADMIN_SECRET_HEADER = "X-Admin-Secret"
ADMIN_API_PREFIX = "/api/admin/"


class AdminSecretAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin API authentication.

    This middleware:
    1. Checks ``X-Admin-Secret`` on every request under /api/admin/
    2. Compares it with ``settings.ADMIN_SECRET`` in constant time
    3. Marks the request as admin-authorized, or returns 401
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Validate the admin secret for admin API requests.

        Args:
            request: HTTP request

        Returns:
            JsonResponse with 401 if authentication fails, None otherwise
        """
        request.is_admin = False  # type: ignore

        if not request.path.startswith(ADMIN_API_PREFIX):
            return None

        provided = request.headers.get(ADMIN_SECRET_HEADER, "")
        expected = getattr(settings, "ADMIN_SECRET", "")

        if not provided:
            return self._unauthorized("Missing admin secret. Provide X-Admin-Secret header.")

        if not expected or not secrets.compare_digest(provided.encode(), expected.encode()):
            logger.warning(
                "Invalid admin secret attempted",
                extra={"path": request.path, "remote_addr": request.META.get("REMOTE_ADDR")},
            )
            return self._unauthorized("Invalid admin secret")

        request.is_admin = True  # type: ignore
        return None

    def _unauthorized(self, message: str) -> JsonResponse:
        return JsonResponse(
            {"error": {"code": "UNAUTHORIZED", "message": message}},
            status=401,
        )
