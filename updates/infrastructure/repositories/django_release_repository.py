"""
Django implementation of ReleaseRepository port.
"""
from typing import Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F, Sum
from django.utils import timezone

from core.domain.exceptions import ReleaseAlreadyExistsError, ReleaseNotFoundError
from core.domain.value_objects import ReleaseType
from updates.domain.release import Release
from updates.infrastructure.models import Release as ReleaseModel
from updates.ports.release_repository import ReleaseRepository


class DjangoReleaseRepository(ReleaseRepository):
    """Django ORM implementation of ReleaseRepository."""

    def _to_domain(self, model: ReleaseModel) -> Release:
        return Release(
            id=model.id,
            version=model.version,
            build_number=model.build_number,
            release_type=ReleaseType(model.release_type),
            filename=model.filename,
            file_size=model.file_size,
            checksum=model.checksum,
            release_notes=model.release_notes,
            force_update=model.force_update,
            is_active=model.is_active,
            download_count=model.download_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def create(self, release: Release) -> Release:
        model = ReleaseModel(
            id=release.id,
            version=release.version,
            build_number=release.build_number,
            release_type=release.release_type.value,
            filename=release.filename,
            file_size=release.file_size,
            checksum=release.checksum,
            release_notes=release.release_notes,
            force_update=release.force_update,
            is_active=release.is_active,
            download_count=release.download_count,
            created_at=release.created_at,
        )
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise ReleaseAlreadyExistsError(
                f"Update version {release.version} already exists"
            ) from e
        return self._to_domain(model)

    @sync_to_async
    def save(self, release: Release) -> Release:
        updated = ReleaseModel.objects.filter(id=release.id).update(
            build_number=release.build_number,
            release_type=release.release_type.value,
            release_notes=release.release_notes,
            force_update=release.force_update,
            is_active=release.is_active,
            updated_at=release.updated_at,
        )
        if not updated:
            raise ReleaseNotFoundError(f"Update version {release.version} not found")
        return self._to_domain(ReleaseModel.objects.get(id=release.id))

    @sync_to_async
    def find_by_version(self, version: str) -> Optional[Release]:
        try:
            return self._to_domain(ReleaseModel.objects.get(version=version))
        except ReleaseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_latest_active_above(self, build_number: int) -> Optional[Release]:
        model = (
            ReleaseModel.objects.filter(is_active=True, build_number__gt=build_number)
            .order_by("-build_number")
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_latest(self) -> Optional[Release]:
        model = ReleaseModel.objects.order_by("-build_number").first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def increment_download_count(self, version: str) -> Optional[Release]:
        """Add one to the counter with an F() expression, no read-modify-write."""
        updated = ReleaseModel.objects.filter(version=version).update(
            download_count=F("download_count") + 1,
            updated_at=timezone.now(),
        )
        if not updated:
            return None
        return self._to_domain(ReleaseModel.objects.get(version=version))

    @sync_to_async
    def list(self, offset: int, limit: int) -> List[Release]:
        models = ReleaseModel.objects.order_by("-build_number")[offset : offset + limit]
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def count(self) -> int:
        return ReleaseModel.objects.count()

    @sync_to_async
    def statistics(self) -> Dict:
        return {
            "total_updates": ReleaseModel.objects.count(),
            "active_updates": ReleaseModel.objects.filter(is_active=True).count(),
            "total_downloads": ReleaseModel.objects.aggregate(total=Sum("download_count"))["total"]
            or 0,
        }
