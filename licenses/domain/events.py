"""
License domain events.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent, utc_now


class LicenseCreated(DomainEvent):
    """Event raised when a license key is minted."""

    def __init__(
        self,
        license_id: uuid.UUID,
        license_key: str,
        plan: str,
        max_devices: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(license_id),
            event_type="LicenseCreated",
        )
        self.license_id = license_id
        self.license_key = license_key
        self.plan = plan
        self.max_devices = max_devices


class LicenseDeactivated(DomainEvent):
    """Event raised when a license is switched off by an admin."""

    def __init__(
        self,
        license_id: uuid.UUID,
        license_key: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(license_id),
            event_type="LicenseDeactivated",
        )
        self.license_id = license_id
        self.license_key = license_key
