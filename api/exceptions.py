"""
API exception handlers.

Maps the domain error taxonomy to HTTP responses with the body
``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}}

DOMAIN_STATUS_CODES = (
    (ValidationFailure, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def error_response(code: str, message: str, status_code: int, details=None) -> Response:
    """Build an error response in the API's error envelope."""
    body = {"error": {"code": code, "message": message}}
    if details is not None:
        body["error"]["details"] = details
    return Response(body, status=status_code)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, Http404):
        response = error_response("NOT_FOUND", "Resource not found", status.HTTP_404_NOT_FOUND)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {"error": {"code": code, "message": str(detail or exc.default_detail)}}
    else:
        response = _handle_unexpected_exception(exc, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", None) or getattr(request, "correlation_id", None)


def _status_for(exc: DomainException) -> int:
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(
            "Domain failure: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
        return Response(INTERNAL_ERROR_BODY, status=status_code)

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return error_response(exc.code, exc.message, status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Log full detail for operators; return a fixed body to the caller."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=exc)
    return Response(INTERNAL_ERROR_BODY, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
