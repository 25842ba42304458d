"""
Release repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from updates.domain.release import Release


class ReleaseRepository(ABC):
    """Abstract repository for Release entities."""

    @abstractmethod
    async def create(self, release: Release) -> Release:
        """
        Insert a new release.

        Raises:
            ReleaseAlreadyExistsError: If the version is already stored
        """

    @abstractmethod
    async def save(self, release: Release) -> Release:
        """Persist the active flag and metadata of an existing release."""

    @abstractmethod
    async def find_by_version(self, version: str) -> Optional[Release]:
        """Find a release by its version string."""

    @abstractmethod
    async def find_latest_active_above(self, build_number: int) -> Optional[Release]:
        """
        Find the newest active release with a build number strictly greater.

        Args:
            build_number: Client build number

        Returns:
            The active release with the highest build number above the
            given one, or None
        """

    @abstractmethod
    async def find_latest(self) -> Optional[Release]:
        """Find the release with the highest build number, active or not."""

    @abstractmethod
    async def increment_download_count(self, version: str) -> Optional[Release]:
        """
        Atomically add one to a release's download counter.

        Returns:
            The updated release, or None if the version is unknown
        """

    @abstractmethod
    async def list(self, offset: int, limit: int) -> List[Release]:
        """List releases by build number descending."""

    @abstractmethod
    async def count(self) -> int:
        """Count all releases."""

    @abstractmethod
    async def statistics(self) -> Dict:
        """
        Aggregate release counts.

        Returns:
            Dict with ``total_updates``, ``active_updates`` and
            ``total_downloads``
        """
