"""
Admin API views.

Used by operators to mint and inspect licenses, free device slots and
publish releases. Every request must carry the admin secret; the
AdminSecretAuthenticationMiddleware marks authorized requests with
``request.is_admin``.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.deactivate_device import DeactivateDeviceCommand
from activations.application.handlers.deactivate_device_handler import DeactivateDeviceHandler
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.exceptions import error_response
from api.v1.admin.serializers import (
    CreateLicenseRequestSerializer,
    CreateReleaseRequestSerializer,
    DeactivateDeviceResponseSerializer,
    LicenseListResponseSerializer,
    LicenseSerializer,
    LicenseStatisticsSerializer,
    PageQuerySerializer,
    ReleaseListResponseSerializer,
    ReleaseSerializer,
    UpdateStatisticsSerializer,
)
from core.domain.exceptions import UnauthorizedError
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.deactivate_license import DeactivateLicenseCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.application.handlers.deactivate_license_handler import DeactivateLicenseHandler
from licenses.application.handlers.get_license_handler import GetLicenseHandler
from licenses.application.handlers.license_statistics_handler import LicenseStatisticsHandler
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.get_license_statistics import GetLicenseStatisticsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_payment_repository import DjangoPaymentRepository
from updates.application.commands.create_release import CreateReleaseCommand
from updates.application.commands.deactivate_release import DeactivateReleaseCommand
from updates.application.handlers.create_release_handler import CreateReleaseHandler
from updates.application.handlers.deactivate_release_handler import DeactivateReleaseHandler
from updates.application.handlers.list_releases_handler import ListReleasesHandler
from updates.application.handlers.update_statistics_handler import UpdateStatisticsHandler
from updates.application.queries.get_update_statistics import GetUpdateStatisticsQuery
from updates.application.queries.list_releases import ListReleasesQuery
from updates.domain.versioning import version_to_build_number
from updates.infrastructure.repositories.django_release_repository import (
    DjangoReleaseRepository,
)
from updates.infrastructure.repositories.django_update_history_repository import (
    DjangoUpdateHistoryRepository,
)

_license_repo = DjangoLicenseRepository()
_activation_repo = DjangoActivationRepository()
_payment_repo = DjangoPaymentRepository()
_release_repo = DjangoReleaseRepository()
_history_repo = DjangoUpdateHistoryRepository()

tracer = get_tracer(__name__)

ADMIN_SECRET_HEADER = OpenApiParameter(
    name="X-Admin-Secret",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Shared admin secret",
)


def _validation_error(serializer) -> Response:
    return error_response(
        "VALIDATION_FAILED",
        "Validation failed",
        status.HTTP_400_BAD_REQUEST,
        details=serializer.errors,
    )


class AdminAPIView(APIView):
    """Base view that refuses requests the admin middleware did not authorize."""

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if not getattr(request, "is_admin", False):
            raise UnauthorizedError()


class LicenseCollectionView(AdminAPIView):
    """Create and list licenses."""

    @extend_schema(
        operation_id="admin_create_license",
        summary="Create License",
        description=(
            "Mint a new license key for a plan. The plan fixes the device quota "
            "unless max_devices overrides it."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Validation error"},
            401: {"description": "Missing or invalid admin secret"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_create_license") as span:
            span.set_attribute("operation", "admin_create_license")

            serializer = CreateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            data = serializer.validated_data
            span.set_attribute("license.plan", data["plan"])

            handler = CreateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                CreateLicenseCommand(
                    plan=data["plan"],
                    email=data.get("email"),
                    max_devices=data.get("max_devices"),
                    expires_at=data.get("expires_at"),
                )
            )

            span.set_attribute("license.key", result.license_key)
            return Response(
                {"success": True, "data": LicenseSerializer(result).data},
                status=status.HTTP_201_CREATED,
            )

    @extend_schema(
        operation_id="admin_list_licenses",
        summary="List Licenses",
        description="List licenses newest first with their active devices and payments.",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER, PageQuerySerializer],
        responses={200: LicenseListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_licenses"):
            serializer = PageQuerySerializer(data=request.query_params)
            if not serializer.is_valid():
                return _validation_error(serializer)

            handler = ListLicensesHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
                payment_repository=_payment_repo,
            )
            result = await handler.handle(ListLicensesQuery(**serializer.validated_data))

            body = LicenseListResponseSerializer(
                {"success": True, "licenses": result.licenses, "pagination": result.pagination}
            ).data
            return Response(body, status=status.HTTP_200_OK)


class LicenseStatisticsView(AdminAPIView):
    """Aggregate license counts."""

    @extend_schema(
        operation_id="admin_license_statistics",
        summary="License Statistics",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        responses={200: LicenseStatisticsSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_statistics)(request)

    async def _handle_statistics(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_license_statistics"):
            handler = LicenseStatisticsHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
            )
            result = await handler.handle(GetLicenseStatisticsQuery())
            return Response(
                {"success": True, "data": LicenseStatisticsSerializer(result).data},
                status=status.HTTP_200_OK,
            )


class LicenseDetailView(AdminAPIView):
    """A single license with its devices and payments."""

    @extend_schema(
        operation_id="admin_get_license",
        summary="Get License",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        responses={
            200: LicenseSerializer,
            404: {"description": "License not found"},
        },
    )
    def get(self, request: Request, license_key: str) -> Response:
        return async_to_sync(self._handle_get)(request, license_key)

    async def _handle_get(self, request: Request, license_key: str) -> Response:
        with tracer.start_as_current_span("admin_get_license") as span:
            span.set_attribute("license.key", license_key)

            handler = GetLicenseHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
                payment_repository=_payment_repo,
            )
            result = await handler.handle(GetLicenseQuery(license_key=license_key))
            return Response(
                {"success": True, "data": LicenseSerializer(result).data},
                status=status.HTTP_200_OK,
            )


class DeactivateLicenseView(AdminAPIView):
    """Switch a license off. Bound devices keep their slots."""

    @extend_schema(
        operation_id="admin_deactivate_license",
        summary="Deactivate License",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        request=None,
        responses={
            200: LicenseSerializer,
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request, license_key: str) -> Response:
        return async_to_sync(self._handle_deactivate)(request, license_key)

    async def _handle_deactivate(self, request: Request, license_key: str) -> Response:
        with tracer.start_as_current_span("admin_deactivate_license") as span:
            span.set_attribute("license.key", license_key)

            handler = DeactivateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(DeactivateLicenseCommand(license_key=license_key))
            return Response(
                {"success": True, "data": LicenseSerializer(result).data},
                status=status.HTTP_200_OK,
            )


class DeactivateDeviceView(AdminAPIView):
    """Free the slot a machine holds on a license."""

    @extend_schema(
        operation_id="admin_deactivate_device",
        summary="Deactivate Device",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        responses={
            200: DeactivateDeviceResponseSerializer,
            404: {"description": "License or active device not found"},
        },
    )
    def delete(self, request: Request, license_key: str, machine_id: str) -> Response:
        return async_to_sync(self._handle_deactivate_device)(request, license_key, machine_id)

    async def _handle_deactivate_device(
        self, request: Request, license_key: str, machine_id: str
    ) -> Response:
        with tracer.start_as_current_span("admin_deactivate_device") as span:
            span.set_attribute("license.key", license_key)
            span.set_attribute("machine_id", machine_id)

            handler = DeactivateDeviceHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
            )
            result = await handler.handle(
                DeactivateDeviceCommand(license_key=license_key, machine_id=machine_id)
            )
            return Response(
                {"success": True, "data": DeactivateDeviceResponseSerializer(result).data},
                status=status.HTTP_200_OK,
            )


class ReleaseCollectionView(AdminAPIView):
    """Publish and list releases."""

    @extend_schema(
        operation_id="admin_create_release",
        summary="Create Release",
        description=(
            "Register an uploaded disk image as a release. The build number is "
            "derived from the version when omitted."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        request=CreateReleaseRequestSerializer,
        responses={
            201: ReleaseSerializer,
            400: {"description": "Validation error"},
            409: {"description": "Version already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_create_release") as span:
            serializer = CreateReleaseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            data = serializer.validated_data
            span.set_attribute("update.version", data["version"])
            build_number = data.get("build_number")
            if build_number is None:
                build_number = version_to_build_number(data["version"])

            handler = CreateReleaseHandler(release_repository=_release_repo)
            result = await handler.handle(
                CreateReleaseCommand(
                    version=data["version"],
                    build_number=build_number,
                    release_type=data["release_type"],
                    filename=data["filename"],
                    file_size=data["file_size"],
                    checksum=data["checksum"].lower(),
                    release_notes=data.get("release_notes") or None,
                    force_update=data["force_update"],
                )
            )
            return Response(
                {"success": True, "data": ReleaseSerializer(result).data},
                status=status.HTTP_201_CREATED,
            )

    @extend_schema(
        operation_id="admin_list_releases",
        summary="List Releases",
        description="List releases, highest build number first.",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER, PageQuerySerializer],
        responses={200: ReleaseListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_list_releases"):
            serializer = PageQuerySerializer(data=request.query_params)
            if not serializer.is_valid():
                return _validation_error(serializer)

            handler = ListReleasesHandler(release_repository=_release_repo)
            result = await handler.handle(ListReleasesQuery(**serializer.validated_data))

            body = ReleaseListResponseSerializer(
                {"success": True, "updates": result.updates, "pagination": result.pagination}
            ).data
            return Response(body, status=status.HTTP_200_OK)


class UpdateStatisticsView(AdminAPIView):
    """Aggregate release and update history counts."""

    @extend_schema(
        operation_id="admin_update_statistics",
        summary="Update Statistics",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        responses={200: UpdateStatisticsSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_statistics)(request)

    async def _handle_statistics(self, request: Request) -> Response:
        with tracer.start_as_current_span("admin_update_statistics"):
            handler = UpdateStatisticsHandler(
                release_repository=_release_repo,
                history_repository=_history_repo,
            )
            result = await handler.handle(GetUpdateStatisticsQuery())
            return Response(
                {"success": True, "data": UpdateStatisticsSerializer(result).data},
                status=status.HTTP_200_OK,
            )


class DeactivateReleaseView(AdminAPIView):
    """Withdraw a release from update checks."""

    @extend_schema(
        operation_id="admin_deactivate_release",
        summary="Deactivate Release",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_HEADER],
        request=None,
        responses={
            200: ReleaseSerializer,
            404: {"description": "Update version not found"},
        },
    )
    def post(self, request: Request, version: str) -> Response:
        return async_to_sync(self._handle_deactivate)(request, version)

    async def _handle_deactivate(self, request: Request, version: str) -> Response:
        with tracer.start_as_current_span("admin_deactivate_release") as span:
            span.set_attribute("update.version", version)

            handler = DeactivateReleaseHandler(release_repository=_release_repo)
            result = await handler.handle(DeactivateReleaseCommand(version=version))
            return Response(
                {"success": True, "data": ReleaseSerializer(result).data},
                status=status.HTTP_200_OK,
            )
