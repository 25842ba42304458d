"""
Update domain events.
"""
import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent, utc_now


class ReleaseCreated(DomainEvent):
    """Event raised when a release is published."""

    def __init__(
        self,
        release_id: uuid.UUID,
        version: str,
        build_number: int,
        release_type: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(release_id),
            event_type="ReleaseCreated",
        )
        self.release_id = release_id
        self.version = version
        self.build_number = build_number
        self.release_type = release_type


class ReleaseDeactivated(DomainEvent):
    """Event raised when a release is withdrawn."""

    def __init__(
        self,
        release_id: uuid.UUID,
        version: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(release_id),
            event_type="ReleaseDeactivated",
        )
        self.release_id = release_id
        self.version = version


class UpdateChecked(DomainEvent):
    """Event raised for every update check; offered_version is None when up to date."""

    def __init__(
        self,
        user_id: str,
        reported_version: str,
        offered_version: Optional[str],
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=user_id,
            event_type="UpdateChecked",
        )
        self.user_id = user_id
        self.reported_version = reported_version
        self.offered_version = offered_version


class UpdateStatusRecorded(DomainEvent):
    """Event raised when a started update attempt is closed."""

    def __init__(
        self,
        history_id: uuid.UUID,
        user_id: str,
        to_version: str,
        status: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(history_id),
            event_type="UpdateStatusRecorded",
        )
        self.history_id = history_id
        self.user_id = user_id
        self.to_version = to_version
        self.status = status


class ArtifactDownloaded(DomainEvent):
    """Event raised when a download is counted."""

    def __init__(
        self,
        release_id: uuid.UUID,
        version: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or utc_now(),
            aggregate_id=str(release_id),
            event_type="ArtifactDownloaded",
        )
        self.release_id = release_id
        self.version = version
