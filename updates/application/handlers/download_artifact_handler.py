"""
DownloadArtifactHandler.
"""

import logging

from core.domain.exceptions import ReleaseNotFoundError
from core.infrastructure.events import event_bus
from updates.application.commands.download_artifact import DownloadArtifactCommand
from updates.application.dto.update_dto import ArtifactDTO
from updates.domain.events import ArtifactDownloaded
from updates.ports.release_repository import ReleaseRepository

logger = logging.getLogger(__name__)


class DownloadArtifactHandler:
    """Handler for DownloadArtifactCommand. Counts the download before the file is streamed."""

    def __init__(self, release_repository: ReleaseRepository):
        self.release_repository = release_repository

    async def handle(self, command: DownloadArtifactCommand) -> ArtifactDTO:
        """
        Handle download artifact command.

        Raises:
            ReleaseNotFoundError: If the version is unknown
        """
        release = await self.release_repository.increment_download_count(command.version)
        if release is None:
            raise ReleaseNotFoundError(f"Update version {command.version} not found")

        logger.info("Download count incremented for version %s", release.version)
        await event_bus.publish(ArtifactDownloaded(release_id=release.id, version=release.version))
        return ArtifactDTO(
            version=release.version,
            filename=release.filename,
            file_size=release.file_size,
            checksum=release.checksum,
            download_count=release.download_count,
        )
