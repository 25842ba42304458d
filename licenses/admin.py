"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License, Payment


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    can_delete = False
    fields = ["provider", "transaction_id", "amount", "currency", "status", "created_at"]
    readonly_fields = fields


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "email",
        "plan",
        "status_display",
        "devices_display",
        "expires_at",
        "created_at",
    ]
    list_filter = ["plan", "is_active", "expires_at", "created_at"]
    search_fields = ["license_key", "email"]
    # device_count only moves with activation and deactivation.
    readonly_fields = [
        "id",
        "license_key",
        "device_count",
        "activated_at",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "email", "plan", "is_active"),
            },
        ),
        (
            "Devices",
            {
                "fields": ("max_devices", "device_count", "activated_at"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )
    inlines = [PaymentInline]

    def status_display(self, obj):
        """Display status with color coding."""
        if obj.is_active:
            return format_html('<span style="color: green; font-weight: bold;">{}</span>', "ACTIVE")
        return format_html('<span style="color: red; font-weight: bold;">{}</span>', "INACTIVE")

    status_display.short_description = "Status"

    def devices_display(self, obj):
        """Display used and allowed devices, red when full."""
        text = f"{obj.device_count} / {obj.max_devices}"
        if obj.device_count >= obj.max_devices:
            return format_html('<span style="color: red;">{}</span>', text)
        return text

    devices_display.short_description = "Devices"


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for Payment model."""

    list_display = ["transaction_id", "provider", "amount", "currency", "plan", "status", "created_at"]
    list_filter = ["provider", "status", "plan", "created_at"]
    search_fields = ["transaction_id", "email", "license__license_key"]
    readonly_fields = ["id", "created_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")
