"""
Activation domain entity.

An activation binds one license to one machine and occupies one device
slot while it is active.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.events import utc_now
from core.domain.exceptions import ValidationFailure


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    Immutable; state transitions return new instances.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    machine_id: str
    device_name: Optional[str]
    os_version: Optional[str]
    app_version: Optional[str]
    is_active: bool
    activated_at: datetime
    last_seen_at: datetime
    deactivated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.license_id:
            raise ValidationFailure("License ID is required")
        if not self.machine_id or not self.machine_id.strip():
            raise ValidationFailure("Machine ID is required", code="INVALID_MACHINE_ID")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        machine_id: str,
        device_name: Optional[str] = None,
        os_version: Optional[str] = None,
        app_version: Optional[str] = None,
        activation_id: Optional[uuid.UUID] = None,
    ) -> "Activation":
        """
        Create a new active binding.

        Args:
            license_id: Owning license UUID
            machine_id: Caller-supplied machine identifier
            device_name: Optional human-readable device name
            os_version: Optional OS version
            app_version: Optional application version
            activation_id: Optional UUID (generated if not provided)

        Returns:
            Activation entity instance
        """
        now = utc_now()
        return cls(
            id=activation_id or uuid.uuid4(),
            license_id=license_id,
            machine_id=machine_id,
            device_name=device_name,
            os_version=os_version,
            app_version=app_version,
            is_active=True,
            activated_at=now,
            last_seen_at=now,
        )

    def seen(
        self, os_version: Optional[str] = None, app_version: Optional[str] = None
    ) -> "Activation":
        """
        Record a re-validation from the bound machine.

        Version fields are only overwritten when the client reports them.
        """
        return replace(
            self,
            last_seen_at=utc_now(),
            os_version=os_version if os_version is not None else self.os_version,
            app_version=app_version if app_version is not None else self.app_version,
        )

    def deactivate(self) -> "Activation":
        """Return an inactive copy. Deactivating twice returns the same instance."""
        if not self.is_active:
            return self
        return replace(self, is_active=False, deactivated_at=utc_now())
