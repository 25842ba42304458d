"""
CreateReleaseHandler.
"""

import logging

from core.domain.exceptions import ReleaseAlreadyExistsError, ValidationFailure
from core.domain.value_objects import ReleaseType
from core.infrastructure.events import event_bus
from updates.application.commands.create_release import CreateReleaseCommand
from updates.application.dto.update_dto import ReleaseDTO
from updates.domain.events import ReleaseCreated
from updates.domain.release import Release
from updates.ports.release_repository import ReleaseRepository

logger = logging.getLogger(__name__)


class CreateReleaseHandler:
    """Handler for CreateReleaseCommand."""

    def __init__(self, release_repository: ReleaseRepository):
        self.release_repository = release_repository

    async def handle(self, command: CreateReleaseCommand) -> ReleaseDTO:
        """
        Handle create release command.

        Args:
            command: CreateReleaseCommand

        Returns:
            ReleaseDTO of the stored release

        Raises:
            ValidationFailure: If the release type is unknown
            ReleaseAlreadyExistsError: If the version already exists
        """
        try:
            release_type = ReleaseType(command.release_type)
        except ValueError:
            raise ValidationFailure(
                f"Invalid release type '{command.release_type}'", code="INVALID_RELEASE_TYPE"
            ) from None

        if await self.release_repository.find_by_version(command.version) is not None:
            raise ReleaseAlreadyExistsError(f"Update version {command.version} already exists")

        release = Release.create(
            version=command.version,
            build_number=command.build_number,
            release_type=release_type,
            filename=command.filename,
            file_size=command.file_size,
            checksum=command.checksum,
            release_notes=command.release_notes,
            force_update=command.force_update,
        )
        # The unique column still guards against a concurrent create.
        saved = await self.release_repository.create(release)

        logger.info("Created update %s (build %s)", saved.version, saved.build_number)
        await event_bus.publish(
            ReleaseCreated(
                release_id=saved.id,
                version=saved.version,
                build_number=saved.build_number,
                release_type=saved.release_type.value,
            )
        )
        return ReleaseDTO.from_entity(saved)
