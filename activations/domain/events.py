"""
Activation domain events.
"""
import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent, utc_now


class LicenseValidated(DomainEvent):
    """Event raised for every validation decision, successful or not."""

    def __init__(
        self,
        license_key: str,
        machine_id: str,
        outcome: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=license_key,
            event_type="LicenseValidated",
        )
        self.license_key = license_key
        self.machine_id = machine_id
        self.outcome = outcome


class DeviceActivated(DomainEvent):
    """Event raised when a machine claims a device slot."""

    def __init__(
        self,
        activation_id: uuid.UUID,
        license_id: uuid.UUID,
        machine_id: str,
        device_count: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(activation_id),
            event_type="DeviceActivated",
        )
        self.activation_id = activation_id
        self.license_id = license_id
        self.machine_id = machine_id
        self.device_count = device_count


class DeviceDeactivated(DomainEvent):
    """Event raised when a device slot is released."""

    def __init__(
        self,
        activation_id: uuid.UUID,
        license_id: uuid.UUID,
        machine_id: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(activation_id),
            event_type="DeviceDeactivated",
        )
        self.activation_id = activation_id
        self.license_id = license_id
        self.machine_id = machine_id
