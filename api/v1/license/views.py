"""
License API views.

Called by the desktop client on launch to validate a key and bind the
machine to a device slot.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.handlers.validate_license_handler import ValidateLicenseHandler
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.exceptions import error_response
from api.v1.license.serializers import (
    ValidateLicenseRequestSerializer,
    ValidateLicenseResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()
_activation_repo = DjangoActivationRepository()

tracer = get_tracer(__name__)


class ValidateLicenseView(APIView):
    """View for validating a license key on a machine."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Validate a license key for a machine. A machine that is not yet bound "
            "to the license takes a free device slot. Invalid, inactive, expired and "
            "over-quota keys answer 400 with an errorType."
        ),
        tags=["License API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidateLicenseResponseSerializer,
            400: ValidateLicenseResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key - public endpoint."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            serializer = ValidateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return error_response(
                    "VALIDATION_FAILED",
                    "Validation failed",
                    status.HTTP_400_BAD_REQUEST,
                    details=serializer.errors,
                )

            data = serializer.validated_data
            span.set_attribute("machine_id", data["machine_id"])

            handler = ValidateLicenseHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
                purchase_url=settings.PURCHASE_URL,
            )
            result = await handler.handle(
                ValidateLicenseCommand(
                    license_key=data["license_key"],
                    machine_id=data["machine_id"],
                    device_name=data.get("device_name") or None,
                    os_version=data.get("os_version") or None,
                    app_version=data.get("app_version") or None,
                )
            )

            span.set_attribute("validation.outcome", result.outcome)
            if not result.valid:
                span.set_status(Status(StatusCode.ERROR, result.error_type.value))

            return Response(
                ValidateLicenseResponseSerializer(result).data,
                status=status.HTTP_200_OK if result.valid else status.HTTP_400_BAD_REQUEST,
            )
