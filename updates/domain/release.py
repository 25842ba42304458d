"""
Release domain entity.

A release is a published, downloadable app version.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.events import utc_now
from core.domain.exceptions import ValidationFailure
from core.domain.value_objects import ReleaseType


@dataclass(frozen=True)
class Release:
    """
    Release domain entity.

    Build numbers are trusted as given; they must grow with version
    recency for update selection to be meaningful.
    """

    id: uuid.UUID
    version: str
    build_number: int
    release_type: ReleaseType
    filename: str
    file_size: int
    checksum: str
    release_notes: Optional[str]
    force_update: bool
    is_active: bool
    download_count: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        if not self.version:
            raise ValidationFailure("Version is required")
        if self.build_number < 0:
            raise ValidationFailure("Build number cannot be negative")
        if self.file_size < 0:
            raise ValidationFailure("File size cannot be negative")

    @classmethod
    def create(
        cls,
        version: str,
        build_number: int,
        release_type: ReleaseType,
        filename: str,
        file_size: int,
        checksum: str,
        release_notes: Optional[str] = None,
        force_update: bool = False,
        release_id: Optional[uuid.UUID] = None,
    ) -> "Release":
        """Create an active release with a zero download counter."""
        now = utc_now()
        return cls(
            id=release_id or uuid.uuid4(),
            version=version,
            build_number=build_number,
            release_type=release_type,
            filename=filename,
            file_size=file_size,
            checksum=checksum,
            release_notes=release_notes,
            force_update=force_update,
            is_active=True,
            download_count=0,
            created_at=now,
            updated_at=now,
        )

    @property
    def download_path(self) -> str:
        """Relative URL clients use to fetch the artifact."""
        return f"/api/v2/updates/download/{self.version}"

    def deactivate(self) -> "Release":
        """Return a copy withdrawn from update checks."""
        return replace(self, is_active=False, updated_at=utc_now())
