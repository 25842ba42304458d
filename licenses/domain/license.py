"""
License domain entity.

A license is a purchase entitlement identified by its key. It carries the
device quota derived from its plan and a cached count of active devices.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.events import utc_now
from core.domain.exceptions import ValidationFailure
from core.domain.value_objects import Plan


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Immutable; state transitions return new instances.
    """

    id: uuid.UUID
    license_key: str
    email: Optional[str]
    plan: Plan
    max_devices: int
    is_active: bool
    expires_at: Optional[datetime]
    created_at: datetime
    activated_at: Optional[datetime]
    updated_at: datetime
    device_count: int = 0

    def __post_init__(self):
        if not self.license_key:
            raise ValidationFailure("License key is required")
        if self.max_devices < 1:
            raise ValidationFailure("Max devices must be at least 1", code="INVALID_MAX_DEVICES")
        if self.device_count < 0:
            raise ValidationFailure("Device count cannot be negative")

    @classmethod
    def create(
        cls,
        license_key: str,
        plan: Plan,
        email: Optional[str] = None,
        max_devices: Optional[int] = None,
        expires_at: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new active license with no bound devices.

        Args:
            license_key: Generated license key
            plan: Plan tier
            email: Optional customer email
            max_devices: Quota override; defaults to the plan quota
            expires_at: Optional expiration timestamp
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = utc_now()
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=license_key,
            email=email,
            plan=plan,
            max_devices=max_devices if max_devices is not None else plan.default_max_devices,
            is_active=True,
            expires_at=expires_at,
            created_at=now,
            activated_at=None,
            updated_at=now,
            device_count=0,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """True when the license has an expiration in the past."""
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or utc_now())

    def has_free_slot(self) -> bool:
        """True while the cached device count is below the quota."""
        return self.device_count < self.max_devices

    def deactivate(self) -> "License":
        """Return a copy with the license switched off. Devices stay bound."""
        return replace(self, is_active=False, updated_at=utc_now())
