"""
DeactivateReleaseHandler.
"""

import logging

from core.domain.exceptions import ReleaseNotFoundError
from core.infrastructure.events import event_bus
from updates.application.commands.deactivate_release import DeactivateReleaseCommand
from updates.application.dto.update_dto import ReleaseDTO
from updates.domain.events import ReleaseDeactivated
from updates.ports.release_repository import ReleaseRepository

logger = logging.getLogger(__name__)


class DeactivateReleaseHandler:
    """Handler for DeactivateReleaseCommand."""

    def __init__(self, release_repository: ReleaseRepository):
        self.release_repository = release_repository

    async def handle(self, command: DeactivateReleaseCommand) -> ReleaseDTO:
        release = await self.release_repository.find_by_version(command.version)
        if release is None:
            raise ReleaseNotFoundError(f"Update version {command.version} not found")

        saved = await self.release_repository.save(release.deactivate())

        logger.warning("Update deactivated: %s", saved.version)
        await event_bus.publish(ReleaseDeactivated(release_id=saved.id, version=saved.version))
        return ReleaseDTO.from_entity(saved)
