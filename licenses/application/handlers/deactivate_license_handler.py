"""
DeactivateLicenseHandler.
"""

import logging

from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.deactivate_license import DeactivateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseDeactivated
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class DeactivateLicenseHandler:
    """Handler for DeactivateLicenseCommand. Bound devices are left untouched."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: DeactivateLicenseCommand) -> LicenseDTO:
        license = await self.license_repository.find_by_key(command.license_key)
        if license is None:
            raise LicenseNotFoundError()

        saved = await self.license_repository.save(license.deactivate())

        logger.warning("License deactivated: %s", saved.license_key)
        await event_bus.publish(
            LicenseDeactivated(license_id=saved.id, license_key=saved.license_key)
        )
        return LicenseDTO.from_entity(saved)
