"""
CheckForUpdateHandler.

Offers a client the newest active release above its build number and
records the offer as a started update attempt.
"""

import logging

from core.infrastructure.events import event_bus
from updates.application.dto.update_dto import LatestVersionDTO, UpdateCheckDTO
from updates.application.queries.check_for_update import CheckForUpdateQuery
from updates.domain.events import UpdateChecked
from updates.domain.update_history import UpdateHistory
from updates.domain.versioning import version_to_build_number
from updates.ports.release_repository import ReleaseRepository
from updates.ports.update_history_repository import UpdateHistoryRepository

logger = logging.getLogger(__name__)

UP_TO_DATE_MESSAGE = "You are running the latest version"


class CheckForUpdateHandler:
    """Handler for CheckForUpdateQuery."""

    def __init__(
        self,
        release_repository: ReleaseRepository,
        history_repository: UpdateHistoryRepository,
    ):
        self.release_repository = release_repository
        self.history_repository = history_repository

    async def handle(self, query: CheckForUpdateQuery) -> UpdateCheckDTO:
        """
        Handle check for update query.

        Always offers the newest qualifying release, never an
        intermediate one.

        Raises:
            InvalidVersionError: If the reported version is not numeric
        """
        current_build = version_to_build_number(query.version)
        release = await self.release_repository.find_latest_active_above(current_build)

        if release is None:
            logger.info("No update available for version %s", query.version)
            await event_bus.publish(
                UpdateChecked(
                    user_id=query.user_id, reported_version=query.version, offered_version=None
                )
            )
            return UpdateCheckDTO(update_available=False, message=UP_TO_DATE_MESSAGE)

        await self.history_repository.create(
            UpdateHistory.start(
                release_id=release.id,
                user_id=query.user_id,
                from_version=query.version,
                to_version=release.version,
                platform=query.platform,
                app_version=query.app_version,
            )
        )

        logger.info("Update available: %s -> %s", query.version, release.version)
        await event_bus.publish(
            UpdateChecked(
                user_id=query.user_id,
                reported_version=query.version,
                offered_version=release.version,
            )
        )
        return UpdateCheckDTO(
            update_available=True,
            latest_version=LatestVersionDTO.from_entity(release),
        )
