"""
UpdateStatisticsHandler.
"""

from datetime import timedelta

from core.domain.events import utc_now
from updates.application.dto.update_dto import UpdateStatisticsDTO
from updates.application.queries.get_update_statistics import GetUpdateStatisticsQuery
from updates.ports.release_repository import ReleaseRepository
from updates.ports.update_history_repository import UpdateHistoryRepository


class UpdateStatisticsHandler:
    """Handler for GetUpdateStatisticsQuery."""

    def __init__(
        self,
        release_repository: ReleaseRepository,
        history_repository: UpdateHistoryRepository,
    ):
        self.release_repository = release_repository
        self.history_repository = history_repository

    async def handle(self, query: GetUpdateStatisticsQuery) -> UpdateStatisticsDTO:
        """
        Handle update statistics query.

        ``recent_history`` counts history rows created within the trailing
        window, measured from the time of the call.
        """
        stats = await self.release_repository.statistics()
        since = utc_now() - timedelta(days=query.window_days)
        recent = await self.history_repository.count_since(since)
        return UpdateStatisticsDTO(
            total_updates=stats["total_updates"],
            active_updates=stats["active_updates"],
            total_downloads=stats["total_downloads"],
            recent_history=recent,
        )
