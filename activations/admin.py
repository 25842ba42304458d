"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import LicenseActivation


@admin.register(LicenseActivation)
class LicenseActivationAdmin(admin.ModelAdmin):
    """
    Read-only admin interface for LicenseActivation model.

    Slots are released through the admin API so the license's device
    count stays in step.
    """

    list_display = [
        "license",
        "machine_id",
        "device_name",
        "is_active_display",
        "app_version",
        "activated_at",
        "last_seen_at",
    ]
    list_filter = ["is_active", "activated_at", "last_seen_at"]
    search_fields = ["machine_id", "device_name", "license__license_key"]
    readonly_fields = [
        "id",
        "license",
        "machine_id",
        "device_name",
        "os_version",
        "app_version",
        "is_active",
        "activated_at",
        "last_seen_at",
        "deactivated_at",
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def is_active_display(self, obj):
        """Display active status with color coding."""
        if obj.is_active:
            return format_html('<span style="color: green;">{}</span>', "Active")
        return format_html('<span style="color: gray;">{}</span>', "Inactive")

    is_active_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")
