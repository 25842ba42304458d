"""
UpdateHistory domain entity.

Tracks one client's attempt to move from one version to another.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.events import utc_now
from core.domain.value_objects import UpdateStatus

MANUAL_UPDATE = "manual"


@dataclass(frozen=True)
class UpdateHistory:
    """Update attempt record."""

    id: uuid.UUID
    release_id: uuid.UUID
    user_id: str
    from_version: str
    to_version: str
    update_type: str
    status: UpdateStatus
    platform: Optional[str]
    app_version: Optional[str]
    error_message: Optional[str]
    created_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def start(
        cls,
        release_id: uuid.UUID,
        user_id: str,
        from_version: str,
        to_version: str,
        platform: Optional[str] = None,
        app_version: Optional[str] = None,
    ) -> "UpdateHistory":
        """Record that a client was offered a release."""
        return cls(
            id=uuid.uuid4(),
            release_id=release_id,
            user_id=user_id,
            from_version=from_version,
            to_version=to_version,
            update_type=MANUAL_UPDATE,
            status=UpdateStatus.STARTED,
            platform=platform,
            app_version=app_version,
            error_message=None,
            created_at=utc_now(),
        )

    def close(self, status: UpdateStatus, error_message: Optional[str] = None) -> "UpdateHistory":
        """
        Close a started attempt.

        ``completed_at`` is only stamped when the update succeeded.
        """
        return replace(
            self,
            status=status,
            error_message=error_message,
            completed_at=utc_now() if status is UpdateStatus.COMPLETED else self.completed_at,
        )
