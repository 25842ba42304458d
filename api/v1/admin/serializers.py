"""
Serializers for the admin API.
"""

from rest_framework import serializers

from core.domain.value_objects import Plan, ReleaseType


class PageQuerySerializer(serializers.Serializer):
    """Query parameters shared by the paginated admin listings."""

    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=50, min_value=1, max_value=200)


class PaginationSerializer(serializers.Serializer):
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total = serializers.IntegerField()
    pages = serializers.IntegerField()


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    plan = serializers.ChoiceField(choices=[plan.value for plan in Plan], required=True)
    email = serializers.EmailField(required=False, allow_null=True, max_length=255)
    max_devices = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)


class DeviceSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    machine_id = serializers.CharField()
    device_name = serializers.CharField(allow_null=True)
    os_version = serializers.CharField(allow_null=True)
    app_version = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()
    activated_at = serializers.DateTimeField()
    last_seen_at = serializers.DateTimeField()


class PaymentSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    provider = serializers.CharField()
    transaction_id = serializers.CharField()
    plan = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    email = serializers.EmailField(allow_null=True)
    plan = serializers.CharField()
    max_devices = serializers.IntegerField()
    device_count = serializers.IntegerField()
    is_active = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    activated_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField()
    devices = DeviceSerializer(many=True)
    payments = PaymentSerializer(many=True)


class LicenseListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    licenses = LicenseSerializer(many=True)
    pagination = PaginationSerializer()


class LicenseStatisticsSerializer(serializers.Serializer):
    total_licenses = serializers.IntegerField()
    active_licenses = serializers.IntegerField()
    total_activations = serializers.IntegerField()
    licenses_by_plan = serializers.DictField(child=serializers.IntegerField())


class DeactivateDeviceResponseSerializer(serializers.Serializer):
    license_key = serializers.CharField()
    machine_id = serializers.CharField()
    device_count = serializers.IntegerField()
    message = serializers.CharField()


class CreateReleaseRequestSerializer(serializers.Serializer):
    """
    Serializer for create release request.

    ``build_number`` is derived from ``version`` when omitted.
    """

    version = serializers.RegexField(r"^\d+(\.\d+){0,2}$", required=True, max_length=50)
    build_number = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    release_type = serializers.ChoiceField(
        choices=[t.value for t in ReleaseType], required=False, default=ReleaseType.NORMAL.value
    )
    filename = serializers.CharField(required=True, max_length=255)
    file_size = serializers.IntegerField(required=True, min_value=0)
    checksum = serializers.RegexField(r"^[0-9a-fA-F]{64}$", required=True)
    release_notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    force_update = serializers.BooleanField(required=False, default=False)

    def validate_filename(self, value):
        if "/" in value or "\\" in value or value in (".", ".."):
            raise serializers.ValidationError("Filename must not contain a path.")
        return value


class ReleaseSerializer(serializers.Serializer):
    """Serializer for ReleaseDTO."""

    id = serializers.UUIDField()
    version = serializers.CharField()
    build_number = serializers.IntegerField()
    release_type = serializers.CharField()
    filename = serializers.CharField()
    file_size = serializers.IntegerField()
    checksum = serializers.CharField()
    release_notes = serializers.CharField(allow_null=True)
    force_update = serializers.BooleanField()
    is_active = serializers.BooleanField()
    download_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class ReleaseListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    updates = ReleaseSerializer(many=True)
    pagination = PaginationSerializer()


class UpdateStatisticsSerializer(serializers.Serializer):
    total_updates = serializers.IntegerField()
    active_updates = serializers.IntegerField()
    total_downloads = serializers.IntegerField()
    recent_history = serializers.IntegerField()
