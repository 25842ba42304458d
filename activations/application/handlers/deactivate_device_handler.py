"""
DeactivateDeviceHandler.

Frees the device slot a machine holds on a license.
"""

import logging

from activations.application.commands.deactivate_device import DeactivateDeviceCommand
from activations.application.dto.activation_dto import DeactivateDeviceResponseDTO
from activations.domain.events import DeviceDeactivated
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import ActivationNotFoundError, LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class DeactivateDeviceHandler:
    """Handler for DeactivateDeviceCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
    ):
        self.license_repository = license_repository
        self.activation_repository = activation_repository

    async def handle(self, command: DeactivateDeviceCommand) -> DeactivateDeviceResponseDTO:
        """
        Handle deactivate device command.

        Args:
            command: DeactivateDeviceCommand

        Returns:
            DeactivateDeviceResponseDTO with the license's new device count

        Raises:
            LicenseNotFoundError: If the license key does not exist
            ActivationNotFoundError: If the machine holds no active slot
        """
        license = await self.license_repository.find_by_key(command.license_key)
        if license is None:
            raise LicenseNotFoundError()

        activation = await self.activation_repository.find_active(license.id, command.machine_id)
        if activation is None:
            raise ActivationNotFoundError()

        # A concurrent deactivation may have released the slot first.
        if not await self.activation_repository.release_slot(activation):
            raise ActivationNotFoundError()

        logger.info(
            "Device deactivated: %s from license %s", command.machine_id, command.license_key
        )
        await event_bus.publish(
            DeviceDeactivated(
                activation_id=activation.id,
                license_id=license.id,
                machine_id=activation.machine_id,
            )
        )

        refreshed = await self.license_repository.find_by_id(license.id)
        return DeactivateDeviceResponseDTO(
            license_key=license.license_key,
            machine_id=command.machine_id,
            device_count=refreshed.device_count if refreshed else license.device_count - 1,
            message="Device deactivated successfully",
        )
