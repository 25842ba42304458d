"""
Serializers for the public license API.

Request bodies use snake_case; responses use the camelCase keys the
desktop client reads.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    # Key format is checked by the validator so a bad key yields an invalid_key result.
    license_key = serializers.CharField(required=True, trim_whitespace=True)
    machine_id = serializers.CharField(required=True, max_length=255)
    device_name = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=255
    )
    os_version = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=100
    )
    app_version = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )


class LicenseSnapshotSerializer(serializers.Serializer):
    """License data returned on successful validation."""

    licenseKey = serializers.CharField(source="license_key")
    plan = serializers.CharField()
    maxDevices = serializers.IntegerField(source="max_devices")
    deviceCount = serializers.IntegerField(source="device_count")
    isActive = serializers.BooleanField(source="is_active")


class ValidateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for validate license response. Absent values are omitted."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    errorType = serializers.SerializerMethodField()
    data = LicenseSnapshotSerializer(allow_null=True)
    purchaseUrl = serializers.CharField(source="purchase_url", allow_null=True)

    def get_errorType(self, obj):
        return obj.error_type.value if obj.error_type else None

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value is not None}
