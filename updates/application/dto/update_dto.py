"""
Update DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from core.domain.value_objects import Pagination
from updates.domain.release import Release


@dataclass
class ReleaseDTO:
    """DTO for release information."""

    id: uuid.UUID
    version: str
    build_number: int
    release_type: str
    filename: str
    file_size: int
    checksum: str
    release_notes: Optional[str]
    force_update: bool
    is_active: bool
    download_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, release: Release) -> "ReleaseDTO":
        return cls(
            id=release.id,
            version=release.version,
            build_number=release.build_number,
            release_type=release.release_type.value,
            filename=release.filename,
            file_size=release.file_size,
            checksum=release.checksum,
            release_notes=release.release_notes,
            force_update=release.force_update,
            is_active=release.is_active,
            download_count=release.download_count,
            created_at=release.created_at,
            updated_at=release.updated_at,
        )


@dataclass
class LatestVersionDTO:
    """DTO for the release offered by an update check."""

    version: str
    build_number: int
    release_type: str
    download_url: str
    file_size: int
    checksum: str
    release_notes: Optional[str]
    force_update: bool

    @classmethod
    def from_entity(cls, release: Release) -> "LatestVersionDTO":
        return cls(
            version=release.version,
            build_number=release.build_number,
            release_type=release.release_type.value,
            download_url=release.download_path,
            file_size=release.file_size,
            checksum=release.checksum,
            release_notes=release.release_notes,
            force_update=release.force_update,
        )


@dataclass
class UpdateCheckDTO:
    """DTO for update check response."""

    update_available: bool
    latest_version: Optional[LatestVersionDTO] = None
    message: Optional[str] = None


@dataclass
class ArtifactDTO:
    """DTO handed to the transport layer to stream an artifact."""

    version: str
    filename: str
    file_size: int
    checksum: str
    download_count: int


@dataclass
class ReleaseListDTO:
    """DTO for a page of releases."""

    updates: List[ReleaseDTO]
    pagination: Pagination


@dataclass
class UpdateStatisticsDTO:
    """DTO for aggregate update counts."""

    total_updates: int
    active_updates: int
    total_downloads: int
    recent_history: int
