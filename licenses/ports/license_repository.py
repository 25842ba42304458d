"""
License repository port (interface).

Implementations live in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import uuid

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    ``device_count`` and ``activated_at`` are owned by the activation
    repository's slot operations; ``save`` never writes them.
    """

    @abstractmethod
    async def create(self, license: License) -> License:
        """
        Insert a new license.

        Raises:
            DuplicateLicenseKeyError: If the key is already taken
        """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Persist the admin-editable fields of an existing license.

        Args:
            license: License entity to save

        Returns:
            Saved license entity as stored
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """Find a license by ID."""

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def list(self, offset: int, limit: int) -> List[License]:
        """List licenses newest first."""

    @abstractmethod
    async def count(self) -> int:
        """Count all licenses."""

    @abstractmethod
    async def statistics(self) -> Dict:
        """
        Aggregate license counts.

        Returns:
            Dict with ``total_licenses``, ``active_licenses`` and
            ``licenses_by_plan`` (plan name -> count)
        """
