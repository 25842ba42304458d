"""
Django implementation of ActivationRepository port.

Slot claim and release are conditional UPDATEs wrapped in
``transaction.atomic()`` together with the activation row write, so two
concurrent requests can never push ``device_count`` past ``max_devices``
or decrement it twice for the same activation.
"""

import logging
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from activations.domain.activation import Activation
from activations.infrastructure.models import LicenseActivation as ActivationModel
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import DuplicateActivationError
from licenses.infrastructure.models import License as LicenseModel

logger = logging.getLogger(__name__)


class DjangoActivationRepository(ActivationRepository):
    """Django ORM implementation of ActivationRepository."""

    def _to_domain(self, model: ActivationModel) -> Activation:
        return Activation(
            id=model.id,
            license_id=model.license_id,
            machine_id=model.machine_id,
            device_name=model.device_name,
            os_version=model.os_version,
            app_version=model.app_version,
            is_active=model.is_active,
            activated_at=model.activated_at,
            last_seen_at=model.last_seen_at,
            deactivated_at=model.deactivated_at,
        )

    @sync_to_async
    def find_active(self, license_id: uuid.UUID, machine_id: str) -> Optional[Activation]:
        model = ActivationModel.objects.filter(
            license_id=license_id, machine_id=machine_id, is_active=True
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_active_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        models = ActivationModel.objects.filter(license_id=license_id, is_active=True).order_by(
            "-activated_at"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def touch(self, activation: Activation) -> Activation:
        ActivationModel.objects.filter(id=activation.id).update(
            last_seen_at=activation.last_seen_at,
            os_version=activation.os_version,
            app_version=activation.app_version,
        )
        return activation

    @sync_to_async
    def claim_slot(self, activation: Activation) -> Optional[Activation]:
        """
        Consume a slot and insert the activation in one transaction.

        Args:
            activation: New active activation

        Returns:
            Stored activation, or None when the quota is already full

        Raises:
            DuplicateActivationError: If the machine already holds an active slot
        """
        with transaction.atomic():
            claimed = LicenseModel.objects.filter(
                id=activation.license_id,
                device_count__lt=F("max_devices"),
            ).update(
                device_count=F("device_count") + 1,
                activated_at=activation.activated_at,
                updated_at=timezone.now(),
            )
            if not claimed:
                return None

            model = ActivationModel(
                id=activation.id,
                license_id=activation.license_id,
                machine_id=activation.machine_id,
                device_name=activation.device_name,
                os_version=activation.os_version,
                app_version=activation.app_version,
                is_active=True,
                activated_at=activation.activated_at,
                last_seen_at=activation.last_seen_at,
            )
            try:
                with transaction.atomic():
                    model.save(force_insert=True)
            except IntegrityError as e:
                # Raising out of the outer block rolls the increment back.
                raise DuplicateActivationError(
                    f"Machine {activation.machine_id} already holds a slot"
                ) from e

        return self._to_domain(model)

    @sync_to_async
    def release_slot(self, activation: Activation) -> bool:
        now = timezone.now()
        with transaction.atomic():
            flipped = ActivationModel.objects.filter(id=activation.id, is_active=True).update(
                is_active=False,
                deactivated_at=now,
            )
            if not flipped:
                logger.info("Activation %s was already inactive", activation.id)
                return False

            LicenseModel.objects.filter(
                id=activation.license_id,
                device_count__gt=0,
            ).update(
                device_count=F("device_count") - 1,
                updated_at=now,
            )
        return True

    @sync_to_async
    def count_active(self) -> int:
        return ActivationModel.objects.filter(is_active=True).count()
