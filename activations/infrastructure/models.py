"""
LicenseActivation Django ORM model.

Domain entities are in activations.domain.activation.
"""
import uuid

from django.db import models
from django.utils import timezone


class LicenseActivation(models.Model):
    """
    Binding of a license to one machine.

    A machine may hold at most one active row per license; inactive rows
    are kept as history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        related_name="activations",
    )
    machine_id = models.CharField(max_length=255)
    device_name = models.CharField(max_length=255, null=True, blank=True)
    os_version = models.CharField(max_length=100, null=True, blank=True)
    app_version = models.CharField(max_length=50, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    activated_at = models.DateTimeField(default=timezone.now)
    last_seen_at = models.DateTimeField(default=timezone.now)
    deactivated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "license_activations"
        ordering = ["-activated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "machine_id"],
                condition=models.Q(is_active=True),
                name="unique_active_machine_per_license",
            ),
        ]
        indexes = [
            models.Index(fields=["license", "is_active"]),
            models.Index(fields=["machine_id"]),
        ]

    def __str__(self):
        return f"{self.license_id} @ {self.machine_id}"
