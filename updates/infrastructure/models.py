"""
Release and UpdateHistory Django ORM models.

Domain entities are in updates.domain.
"""
import uuid

from django.db import models
from django.utils import timezone

from core.domain.value_objects import ReleaseType, UpdateStatus


class Release(models.Model):
    """A published app version and its downloadable artifact."""

    RELEASE_TYPE_CHOICES = [(t.value, t.value.title()) for t in ReleaseType]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    version = models.CharField(max_length=50, unique=True)
    build_number = models.PositiveIntegerField(db_index=True)
    release_type = models.CharField(
        max_length=10, choices=RELEASE_TYPE_CHOICES, default=ReleaseType.NORMAL.value
    )
    filename = models.CharField(max_length=255)
    file_size = models.BigIntegerField()
    checksum = models.CharField(max_length=64)
    release_notes = models.TextField(null=True, blank=True)
    force_update = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    download_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "releases"
        ordering = ["-build_number"]
        indexes = [
            models.Index(fields=["is_active", "build_number"]),
        ]

    def __str__(self):
        return f"{self.version} ({self.build_number})"


class UpdateHistory(models.Model):
    """One client's attempt to update to a release."""

    STATUS_CHOICES = [(s.value, s.value.title()) for s in UpdateStatus]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    release = models.ForeignKey(
        Release,
        on_delete=models.CASCADE,
        related_name="history",
    )
    user_id = models.CharField(max_length=255)
    from_version = models.CharField(max_length=50)
    to_version = models.CharField(max_length=50)
    update_type = models.CharField(max_length=20, default="manual")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    platform = models.CharField(max_length=20, null=True, blank=True)
    app_version = models.CharField(max_length=50, null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "update_history"
        ordering = ["-created_at"]
        verbose_name_plural = "update history"
        indexes = [
            models.Index(fields=["user_id", "to_version", "status"]),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.from_version} -> {self.to_version} ({self.status})"
