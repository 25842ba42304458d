"""
License and Payment Django ORM models.

Domain entities are in licenses.domain.
"""
import uuid

from django.db import models
from django.utils import timezone

from core.domain.value_objects import Plan


class License(models.Model):
    """
    A license key sold to a customer.

    ``device_count`` caches the number of active activations and is only
    changed through conditional updates in the activation repository.
    """

    PLAN_CHOICES = [(plan.value, plan.value) for plan in Plan]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=32, unique=True)
    email = models.EmailField(null=True, blank=True, db_index=True)
    plan = models.CharField(max_length=20, choices=PLAN_CHOICES)
    max_devices = models.PositiveIntegerField(default=1)
    device_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    activated_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["plan"]),
            models.Index(fields=["is_active"]),
        ]

    def __str__(self):
        return self.license_key


class Payment(models.Model):
    """
    A payment recorded by the billing integration.

    Read-only from the point of view of this service.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        License,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
    )
    email = models.EmailField(null=True, blank=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default="USD")
    provider = models.CharField(max_length=50)
    transaction_id = models.CharField(max_length=255, unique=True)
    plan = models.CharField(max_length=20)
    status = models.CharField(max_length=20, default="completed")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "payments"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license", "created_at"]),
        ]

    def __str__(self):
        return f"{self.provider}:{self.transaction_id}"
