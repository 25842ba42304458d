"""
Payment repository port (read-only).
"""
from abc import ABC, abstractmethod
from typing import List
import uuid

from licenses.domain.payment import Payment


class PaymentRepository(ABC):
    """Read access to payments recorded against licenses."""

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID) -> List[Payment]:
        """
        List payments of a license, newest first.

        Args:
            license_id: License UUID

        Returns:
            List of Payment entities
        """
