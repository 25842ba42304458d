"""
Update API views.

Used by the desktop client to find a newer release, download its disk
image and report how the install went.
"""

from pathlib import Path
from typing import Optional

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import FileResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_response
from api.v2.update.serializers import (
    CheckForUpdateQuerySerializer,
    RecordHistoryRequestSerializer,
    UpdateCheckResponseSerializer,
)
from core.domain.value_objects import UpdateStatus
from core.instrumentation import Status, StatusCode, get_tracer
from updates.application.commands.download_artifact import DownloadArtifactCommand
from updates.application.commands.record_history_status import RecordHistoryStatusCommand
from updates.application.handlers.check_for_update_handler import CheckForUpdateHandler
from updates.application.handlers.download_artifact_handler import DownloadArtifactHandler
from updates.application.handlers.record_history_status_handler import (
    RecordHistoryStatusHandler,
)
from updates.application.queries.check_for_update import CheckForUpdateQuery
from updates.infrastructure.repositories.django_release_repository import (
    DjangoReleaseRepository,
)
from updates.infrastructure.repositories.django_update_history_repository import (
    DjangoUpdateHistoryRepository,
)

_release_repo = DjangoReleaseRepository()
_history_repo = DjangoUpdateHistoryRepository()

tracer = get_tracer(__name__)

DISK_IMAGE_CONTENT_TYPE = "application/x-apple-diskimage"


def _validation_error(serializer) -> Response:
    return error_response(
        "VALIDATION_FAILED",
        "Validation failed",
        status.HTTP_400_BAD_REQUEST,
        details=serializer.errors,
    )


def resolve_artifact_path(filename: str) -> Optional[Path]:
    """
    Resolve an artifact filename inside the upload directory.

    Returns None for names that escape the directory.
    """
    upload_dir = Path(settings.UPLOAD_DIR).resolve()
    path = (upload_dir / filename).resolve()
    if upload_dir not in path.parents:
        return None
    return path


class CheckForUpdateView(APIView):
    """View for the client's update check."""

    @extend_schema(
        operation_id="check_for_update",
        summary="Check For Update",
        description=(
            "Return the newest active release whose build number is above the "
            "reported version. Offering a release records a started update attempt."
        ),
        tags=["Update API"],
        parameters=[CheckForUpdateQuerySerializer],
        responses={
            200: UpdateCheckResponseSerializer,
            400: {"description": "Missing or malformed version or userId"},
        },
    )
    def get(self, request: Request) -> Response:
        """Check for a newer release - public endpoint."""
        return async_to_sync(self._handle_check)(request)

    async def _handle_check(self, request: Request) -> Response:
        with tracer.start_as_current_span("check_for_update") as span:
            span.set_attribute("operation", "check_for_update")

            serializer = CheckForUpdateQuerySerializer(data=request.query_params)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            data = serializer.validated_data
            span.set_attribute("update.reported_version", data["version"])

            handler = CheckForUpdateHandler(
                release_repository=_release_repo,
                history_repository=_history_repo,
            )
            result = await handler.handle(
                CheckForUpdateQuery(
                    version=data["version"],
                    user_id=data["user_id"],
                    platform=data["platform"],
                    app_version=data.get("app_version") or None,
                )
            )

            span.set_attribute("update.available", result.update_available)
            return Response(UpdateCheckResponseSerializer(result).data, status=status.HTTP_200_OK)


class DownloadArtifactView(APIView):
    """View for downloading a release's disk image."""

    @extend_schema(
        operation_id="download_update",
        summary="Download Update",
        description=(
            "Stream the disk image for a release. The download is counted before "
            "the file is read from disk."
        ),
        tags=["Update API"],
        parameters=[
            OpenApiParameter(
                name="version",
                type=str,
                location=OpenApiParameter.PATH,
                description="Release version, e.g. 1.2.3",
            ),
        ],
        responses={
            (200, DISK_IMAGE_CONTENT_TYPE): OpenApiTypes.BINARY,
            404: {"description": "Unknown version or missing file"},
        },
    )
    def get(self, request: Request, version: str):
        """Download a release artifact - public endpoint."""
        return async_to_sync(self._handle_download)(request, version)

    async def _handle_download(self, request: Request, version: str):
        with tracer.start_as_current_span("download_update") as span:
            span.set_attribute("operation", "download_update")
            span.set_attribute("update.version", version)

            handler = DownloadArtifactHandler(release_repository=_release_repo)
            artifact = await handler.handle(DownloadArtifactCommand(version=version))

            path = resolve_artifact_path(artifact.filename)
            if path is None or not path.is_file():
                span.set_status(Status(StatusCode.ERROR, "Update file not found"))
                return error_response(
                    "NOT_FOUND", "Update file not found", status.HTTP_404_NOT_FOUND
                )

            response = FileResponse(
                path.open("rb"),
                as_attachment=True,
                filename=artifact.filename,
                content_type=DISK_IMAGE_CONTENT_TYPE,
            )
            response["Cache-Control"] = "public, max-age=3600"
            response["X-Checksum-SHA256"] = artifact.checksum
            return response


class RecordHistoryView(APIView):
    """View for the client's update status report."""

    @extend_schema(
        operation_id="record_update_history",
        summary="Record Update Status",
        description=(
            "Close the newest started update attempt for the user and target "
            "version. Reports without a matching attempt are accepted and ignored."
        ),
        tags=["Update API"],
        request=RecordHistoryRequestSerializer,
        responses={
            200: {"description": "Report accepted"},
            400: {"description": "Validation error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Record an update status - public endpoint."""
        return async_to_sync(self._handle_record)(request)

    async def _handle_record(self, request: Request) -> Response:
        with tracer.start_as_current_span("record_update_history") as span:
            span.set_attribute("operation", "record_update_history")

            serializer = RecordHistoryRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            data = serializer.validated_data
            span.set_attribute("update.status", data["status"])

            # Started rows are written by the update check itself.
            if data["status"] == UpdateStatus.STARTED.value:
                return Response({"success": True}, status=status.HTTP_200_OK)

            handler = RecordHistoryStatusHandler(history_repository=_history_repo)
            await handler.handle(
                RecordHistoryStatusCommand(
                    user_id=data["user_id"],
                    to_version=data["to_version"],
                    status=data["status"],
                    error_message=data.get("error_message") or None,
                )
            )
            return Response({"success": True}, status=status.HTTP_200_OK)
