"""
Activation repository port (interface).

Slot bookkeeping lives here: claiming and releasing a slot touch both the
activation row and the owning license's cached device count, and each
must happen as one atomic unit in storage.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from activations.domain.activation import Activation


class ActivationRepository(ABC):
    """Abstract repository for Activation entities."""

    @abstractmethod
    async def find_active(self, license_id: uuid.UUID, machine_id: str) -> Optional[Activation]:
        """
        Find the active activation of a machine on a license.

        Args:
            license_id: License UUID
            machine_id: Machine identifier

        Returns:
            Active Activation or None
        """

    @abstractmethod
    async def find_active_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        """List active activations of a license, newest first."""

    @abstractmethod
    async def touch(self, activation: Activation) -> Activation:
        """
        Persist ``last_seen_at`` and the version fields of an activation.

        Does not change the active flag or any slot count.
        """

    @abstractmethod
    async def claim_slot(self, activation: Activation) -> Optional[Activation]:
        """
        Atomically consume one device slot and insert the activation.

        The license's ``device_count`` is incremented only while it is
        below ``max_devices``; ``activated_at`` is stamped on the license.

        Args:
            activation: New active activation

        Returns:
            The stored activation, or None when no slot was free

        Raises:
            DuplicateActivationError: If the machine already holds an
                active slot on this license; nothing is written
        """

    @abstractmethod
    async def release_slot(self, activation: Activation) -> bool:
        """
        Atomically deactivate an activation and free its slot.

        The count is decremented only if this call flipped the row from
        active to inactive.

        Returns:
            True if this call released the slot
        """

    @abstractmethod
    async def count_active(self) -> int:
        """Count active activations across all licenses."""
