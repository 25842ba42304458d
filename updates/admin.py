"""
Django admin configuration for updates app.
"""
from django.contrib import admin

from updates.infrastructure.models import Release, UpdateHistory


@admin.register(Release)
class ReleaseAdmin(admin.ModelAdmin):
    """Admin interface for Release model."""

    list_display = [
        "version",
        "build_number",
        "release_type",
        "force_update",
        "is_active",
        "download_count",
        "created_at",
    ]
    list_filter = ["release_type", "is_active", "force_update"]
    search_fields = ["version", "filename"]
    readonly_fields = ["id", "download_count", "created_at", "updated_at"]
    fieldsets = (
        (
            "Version",
            {
                "fields": ("id", "version", "build_number", "release_type", "force_update", "is_active"),
            },
        ),
        (
            "Artifact",
            {
                "fields": ("filename", "file_size", "checksum", "download_count"),
            },
        ),
        (
            "Notes",
            {
                "fields": ("release_notes",),
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


@admin.register(UpdateHistory)
class UpdateHistoryAdmin(admin.ModelAdmin):
    """Admin interface for UpdateHistory model."""

    list_display = [
        "user_id",
        "from_version",
        "to_version",
        "status",
        "platform",
        "created_at",
        "completed_at",
    ]
    list_filter = ["status", "platform", "created_at"]
    search_fields = ["user_id", "to_version", "from_version"]
    readonly_fields = [f.name for f in UpdateHistory._meta.fields]

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("release")
