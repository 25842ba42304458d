"""
UpdateHistory repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from updates.domain.update_history import UpdateHistory


class UpdateHistoryRepository(ABC):
    """Abstract repository for UpdateHistory entities."""

    @abstractmethod
    async def create(self, history: UpdateHistory) -> UpdateHistory:
        """Insert a history row."""

    @abstractmethod
    async def find_latest_started(self, user_id: str, to_version: str) -> Optional[UpdateHistory]:
        """
        Find the most recent started row for a user and target version.

        Returns:
            UpdateHistory or None
        """

    @abstractmethod
    async def save(self, history: UpdateHistory) -> UpdateHistory:
        """Persist status, error message and completion time of a row."""

    @abstractmethod
    async def count_since(self, since: datetime) -> int:
        """Count rows created at or after a point in time."""
