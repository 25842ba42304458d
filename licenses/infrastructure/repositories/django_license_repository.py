"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Count

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseNotFoundError
from core.domain.value_objects import Plan
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """Django ORM implementation of LicenseRepository."""

    def _to_domain(self, model: LicenseModel) -> License:
        return License(
            id=model.id,
            license_key=model.license_key,
            email=model.email,
            plan=Plan(model.plan),
            max_devices=model.max_devices,
            is_active=model.is_active,
            expires_at=model.expires_at,
            created_at=model.created_at,
            activated_at=model.activated_at,
            updated_at=model.updated_at,
            device_count=model.device_count,
        )

    @sync_to_async
    def create(self, license: License) -> License:
        """
        Insert a new license.

        The insert runs in its own savepoint so a key collision leaves the
        surrounding transaction usable for a retry.
        """
        model = LicenseModel(
            id=license.id,
            license_key=license.license_key,
            email=license.email,
            plan=license.plan.value,
            max_devices=license.max_devices,
            device_count=license.device_count,
            is_active=license.is_active,
            expires_at=license.expires_at,
            created_at=license.created_at,
            activated_at=license.activated_at,
        )
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateLicenseKeyError(
                f"License key {license.license_key} already exists"
            ) from e
        return self._to_domain(model)

    @sync_to_async
    def save(self, license: License) -> License:
        updated = LicenseModel.objects.filter(id=license.id).update(
            email=license.email,
            plan=license.plan.value,
            max_devices=license.max_devices,
            is_active=license.is_active,
            expires_at=license.expires_at,
            updated_at=license.updated_at,
        )
        if not updated:
            raise LicenseNotFoundError(f"License {license.license_key} not found")
        return self._to_domain(LicenseModel.objects.get(id=license.id))

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        try:
            return self._to_domain(LicenseModel.objects.get(id=license_id))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        try:
            return self._to_domain(LicenseModel.objects.get(license_key=license_key))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def list(self, offset: int, limit: int) -> List[License]:
        models = LicenseModel.objects.order_by("-created_at")[offset : offset + limit]
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def count(self) -> int:
        return LicenseModel.objects.count()

    @sync_to_async
    def statistics(self) -> Dict:
        """Aggregate totals and the per-plan breakdown in two queries."""
        by_plan = {
            row["plan"]: row["total"]
            for row in LicenseModel.objects.values("plan").annotate(total=Count("id")).order_by()
        }
        return {
            "total_licenses": sum(by_plan.values()),
            "active_licenses": LicenseModel.objects.filter(is_active=True).count(),
            "licenses_by_plan": by_plan,
        }
