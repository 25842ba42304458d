"""
License validation domain service.

Decides whether a machine may use a license key and binds new machines
to free device slots. Business failures are returned as results; only
storage problems raise.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from activations.domain.activation import Activation
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import DuplicateActivationError
from core.domain.value_objects import ValidationErrorType
from licenses.domain.license import License
from licenses.domain.license_key import is_valid_license_key_format
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

DEFAULT_PURCHASE_URL = "https://macman.dev/#pricing"


@dataclass(frozen=True)
class LicenseSnapshot:
    """License data returned to the client on successful validation."""

    license_key: str
    plan: str
    max_devices: int
    device_count: int
    is_active: bool


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation request."""

    valid: bool
    message: str
    error_type: Optional[ValidationErrorType] = None
    data: Optional[LicenseSnapshot] = None
    purchase_url: Optional[str] = None
    activated: bool = False
    activation: Optional[Activation] = None

    @property
    def outcome(self) -> str:
        """Short label for logs and metrics."""
        if self.valid:
            return "activated" if self.activated else "revalidated"
        return self.error_type.value

    @classmethod
    def failure(
        cls,
        error_type: ValidationErrorType,
        message: str,
        purchase_url: Optional[str] = None,
    ) -> "ValidationResult":
        return cls(valid=False, message=message, error_type=error_type, purchase_url=purchase_url)

    @classmethod
    def success(
        cls,
        license: License,
        activation: Activation,
        device_count: int,
        message: str,
        activated: bool = False,
    ) -> "ValidationResult":
        return cls(
            valid=True,
            message=message,
            data=LicenseSnapshot(
                license_key=license.license_key,
                plan=license.plan.value,
                max_devices=license.max_devices,
                device_count=device_count,
                is_active=license.is_active,
            ),
            activated=activated,
            activation=activation,
        )


class LicenseValidator:
    """
    Domain service running the validation decision sequence.

    The checks run in a fixed order: key format, existence, active flag,
    expiration, existing binding, quota, then a new slot claim. An
    expired license is rejected even for a machine that is already bound.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        purchase_url: str = DEFAULT_PURCHASE_URL,
    ):
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.purchase_url = purchase_url

    async def validate(
        self,
        license_key: str,
        machine_id: str,
        device_name: Optional[str] = None,
        os_version: Optional[str] = None,
        app_version: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate a license key for a machine, binding the machine if needed.

        Args:
            license_key: License key presented by the client
            machine_id: Client machine identifier
            device_name: Optional device name
            os_version: Optional OS version
            app_version: Optional app version

        Returns:
            ValidationResult
        """
        if not is_valid_license_key_format(license_key):
            return ValidationResult.failure(
                ValidationErrorType.INVALID_KEY, "Invalid license key format"
            )

        license = await self.license_repository.find_by_key(license_key)
        if license is None:
            return ValidationResult.failure(ValidationErrorType.INVALID_KEY, "License key not found")

        if not license.is_active:
            return ValidationResult.failure(
                ValidationErrorType.INACTIVE, "This license has been deactivated"
            )

        if license.is_expired():
            return ValidationResult.failure(ValidationErrorType.EXPIRED, "This license has expired")

        existing = await self.activation_repository.find_active(license.id, machine_id)
        if existing is not None:
            return await self._revalidate(license, existing, os_version, app_version)

        if not license.has_free_slot():
            return self._quota_reached(license)

        activation = Activation.create(
            license_id=license.id,
            machine_id=machine_id,
            device_name=device_name,
            os_version=os_version,
            app_version=app_version,
        )
        try:
            claimed = await self.activation_repository.claim_slot(activation)
        except DuplicateActivationError:
            # The same machine won a concurrent claim; treat as a re-validation.
            logger.info(
                "Concurrent activation for machine %s on %s; re-validating",
                machine_id,
                license_key,
            )
            existing = await self.activation_repository.find_active(license.id, machine_id)
            if existing is None:
                raise
            return await self._revalidate(license, existing, os_version, app_version)

        if claimed is None:
            return self._quota_reached(license)

        refreshed = await self.license_repository.find_by_id(license.id)
        device_count = refreshed.device_count if refreshed else license.device_count + 1
        logger.info(
            "New device activated for license %s (%s/%s)",
            license_key,
            device_count,
            license.max_devices,
        )
        return ValidationResult.success(
            license, claimed, device_count, "License activated successfully", activated=True
        )

    async def _revalidate(
        self,
        license: License,
        activation: Activation,
        os_version: Optional[str],
        app_version: Optional[str],
    ) -> ValidationResult:
        touched = await self.activation_repository.touch(activation.seen(os_version, app_version))
        active = await self.activation_repository.find_active_by_license(license.id)
        logger.info(
            "License validated for existing machine %s", activation.machine_id
        )
        return ValidationResult.success(
            license, touched, len(active), "License validated successfully"
        )

    def _quota_reached(self, license: License) -> ValidationResult:
        return ValidationResult.failure(
            ValidationErrorType.MAX_DEVICES_REACHED,
            f"Maximum number of devices ({license.max_devices}) reached for this license",
            purchase_url=self.purchase_url,
        )
