"""
RecordHistoryStatusHandler.
"""

import logging
from typing import Optional

from core.domain.value_objects import UpdateStatus
from core.infrastructure.events import event_bus
from updates.application.commands.record_history_status import RecordHistoryStatusCommand
from updates.domain.events import UpdateStatusRecorded
from updates.domain.update_history import UpdateHistory
from updates.ports.update_history_repository import UpdateHistoryRepository

logger = logging.getLogger(__name__)


class RecordHistoryStatusHandler:
    """
    Handler for RecordHistoryStatusCommand.

    Closes the newest started row for the user and target version. A
    report without a matching started row is ignored.
    """

    def __init__(self, history_repository: UpdateHistoryRepository):
        self.history_repository = history_repository

    async def handle(self, command: RecordHistoryStatusCommand) -> Optional[UpdateHistory]:
        """
        Handle record history status command.

        Returns:
            The closed UpdateHistory, or None if nothing matched

        Raises:
            InvalidHistoryStatusError: If status is not completed or failed
        """
        status = UpdateStatus.closing(command.status)

        history = await self.history_repository.find_latest_started(
            command.user_id, command.to_version
        )
        if history is None:
            logger.info(
                "No started update for user %s to %s; ignoring %s report",
                command.user_id,
                command.to_version,
                status.value,
            )
            return None

        closed = await self.history_repository.save(history.close(status, command.error_message))
        await event_bus.publish(
            UpdateStatusRecorded(
                history_id=closed.id,
                user_id=closed.user_id,
                to_version=closed.to_version,
                status=status.value,
            )
        )
        return closed
