"""
Serializers for the update API.

The desktop client sends and reads camelCase keys.
"""

from rest_framework import serializers

from core.domain.value_objects import UpdateStatus


class CheckForUpdateQuerySerializer(serializers.Serializer):
    """Query parameters for an update check."""

    version = serializers.CharField(required=True, max_length=50)
    userId = serializers.CharField(source="user_id", required=True, max_length=255)
    platform = serializers.CharField(required=False, default="darwin", max_length=50)
    appVersion = serializers.CharField(
        source="app_version", required=False, allow_blank=True, max_length=50
    )


class LatestVersionSerializer(serializers.Serializer):
    version = serializers.CharField()
    buildNumber = serializers.IntegerField(source="build_number")
    releaseType = serializers.CharField(source="release_type")
    downloadUrl = serializers.CharField(source="download_url")
    fileSize = serializers.IntegerField(source="file_size")
    checksum = serializers.CharField()
    releaseNotes = serializers.CharField(source="release_notes", allow_null=True)
    forceUpdate = serializers.BooleanField(source="force_update")


class UpdateCheckResponseSerializer(serializers.Serializer):
    """Serializer for update check response. Absent values are omitted."""

    updateAvailable = serializers.BooleanField(source="update_available")
    latestVersion = LatestVersionSerializer(source="latest_version", allow_null=True)
    message = serializers.CharField(allow_null=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value is not None}


class RecordHistoryRequestSerializer(serializers.Serializer):
    """Serializer for an update status report from the client."""

    userId = serializers.CharField(source="user_id", required=True, max_length=255)
    fromVersion = serializers.CharField(source="from_version", required=True, max_length=50)
    toVersion = serializers.CharField(source="to_version", required=True, max_length=50)
    status = serializers.ChoiceField(choices=[s.value for s in UpdateStatus], required=True)
    errorMessage = serializers.CharField(
        source="error_message", required=False, allow_null=True, allow_blank=True
    )
