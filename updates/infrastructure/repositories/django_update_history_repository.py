"""
Django implementation of UpdateHistoryRepository port.
"""
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import UpdateStatus
from updates.domain.update_history import UpdateHistory
from updates.infrastructure.models import UpdateHistory as UpdateHistoryModel
from updates.ports.update_history_repository import UpdateHistoryRepository


class DjangoUpdateHistoryRepository(UpdateHistoryRepository):
    """Django ORM implementation of UpdateHistoryRepository."""

    def _to_domain(self, model: UpdateHistoryModel) -> UpdateHistory:
        return UpdateHistory(
            id=model.id,
            release_id=model.release_id,
            user_id=model.user_id,
            from_version=model.from_version,
            to_version=model.to_version,
            update_type=model.update_type,
            status=UpdateStatus(model.status),
            platform=model.platform,
            app_version=model.app_version,
            error_message=model.error_message,
            created_at=model.created_at,
            completed_at=model.completed_at,
        )

    @sync_to_async
    def create(self, history: UpdateHistory) -> UpdateHistory:
        model = UpdateHistoryModel.objects.create(
            id=history.id,
            release_id=history.release_id,
            user_id=history.user_id,
            from_version=history.from_version,
            to_version=history.to_version,
            update_type=history.update_type,
            status=history.status.value,
            platform=history.platform,
            app_version=history.app_version,
            error_message=history.error_message,
            created_at=history.created_at,
            completed_at=history.completed_at,
        )
        return self._to_domain(model)

    @sync_to_async
    def find_latest_started(self, user_id: str, to_version: str) -> Optional[UpdateHistory]:
        model = (
            UpdateHistoryModel.objects.filter(
                user_id=user_id,
                to_version=to_version,
                status=UpdateStatus.STARTED.value,
            )
            .order_by("-created_at")
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    def save(self, history: UpdateHistory) -> UpdateHistory:
        UpdateHistoryModel.objects.filter(id=history.id).update(
            status=history.status.value,
            error_message=history.error_message,
            completed_at=history.completed_at,
        )
        return history

    @sync_to_async
    def count_since(self, since: datetime) -> int:
        return UpdateHistoryModel.objects.filter(created_at__gte=since).count()
