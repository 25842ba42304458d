"""
Unit tests for release publishing and update resolution handlers.
"""
import pytest

from core.domain.exceptions import (
    InvalidHistoryStatusError,
    InvalidVersionError,
    ReleaseAlreadyExistsError,
    ReleaseNotFoundError,
    ValidationFailure,
)
from core.domain.value_objects import UpdateStatus
from updates.application.commands.create_release import CreateReleaseCommand
from updates.application.commands.deactivate_release import DeactivateReleaseCommand
from updates.application.commands.download_artifact import DownloadArtifactCommand
from updates.application.commands.record_history_status import RecordHistoryStatusCommand
from updates.application.handlers.check_for_update_handler import (
    UP_TO_DATE_MESSAGE,
    CheckForUpdateHandler,
)
from updates.application.handlers.create_release_handler import CreateReleaseHandler
from updates.application.handlers.deactivate_release_handler import DeactivateReleaseHandler
from updates.application.handlers.download_artifact_handler import DownloadArtifactHandler
from updates.application.handlers.list_releases_handler import ListReleasesHandler
from updates.application.handlers.record_history_status_handler import (
    RecordHistoryStatusHandler,
)
from updates.application.handlers.update_statistics_handler import UpdateStatisticsHandler
from updates.application.queries.check_for_update import CheckForUpdateQuery
from updates.application.queries.get_update_statistics import GetUpdateStatisticsQuery
from updates.application.queries.list_releases import ListReleasesQuery
from updates.domain.events import ReleaseCreated, UpdateChecked, UpdateStatusRecorded

CHECKSUM = "b" * 64


def create_command(version="1.0.10", build_number=10010, **kwargs):
    defaults = {
        "release_type": "normal",
        "filename": f"MacMan-{version}.dmg",
        "file_size": 2048,
        "checksum": CHECKSUM,
    }
    defaults.update(kwargs)
    return CreateReleaseCommand(version=version, build_number=build_number, **defaults)


@pytest.fixture
def check_handler(memory_release_repository, memory_history_repository):
    return CheckForUpdateHandler(
        release_repository=memory_release_repository,
        history_repository=memory_history_repository,
    )


@pytest.mark.asyncio
class TestCreateReleaseHandler:
    """Tests for CreateReleaseHandler."""

    async def test_create_release(self, memory_release_repository, recorded_events):
        handler = CreateReleaseHandler(release_repository=memory_release_repository)

        result = await handler.handle(create_command(release_notes="Bug fixes"))

        assert result.version == "1.0.10"
        assert result.build_number == 10010
        assert result.is_active is True
        assert result.download_count == 0
        assert len(recorded_events.of_type(ReleaseCreated)) == 1

    async def test_duplicate_version_conflicts_without_mutation(
        self, memory_release_repository
    ):
        handler = CreateReleaseHandler(release_repository=memory_release_repository)
        await handler.handle(create_command(release_notes="original"))

        with pytest.raises(ReleaseAlreadyExistsError):
            await handler.handle(create_command(release_notes="replacement", file_size=1))

        stored = await memory_release_repository.find_by_version("1.0.10")
        assert stored.release_notes == "original"
        assert stored.file_size == 2048
        assert await memory_release_repository.count() == 1

    async def test_unknown_release_type(self, memory_release_repository):
        handler = CreateReleaseHandler(release_repository=memory_release_repository)

        with pytest.raises(ValidationFailure) as exc_info:
            await handler.handle(create_command(release_type="nightly"))

        assert exc_info.value.code == "INVALID_RELEASE_TYPE"


@pytest.mark.asyncio
class TestCheckForUpdateHandler:
    """Tests for CheckForUpdateHandler."""

    async def test_offers_highest_build_not_intermediate(
        self, check_handler, memory_release_repository, release_factory
    ):
        await memory_release_repository.create(release_factory("1.0.9", 10009))
        await memory_release_repository.create(release_factory("1.0.10", 10010))

        result = await check_handler.handle(CheckForUpdateQuery(version="1.0.8", user_id="user-1"))

        assert result.update_available is True
        assert result.latest_version.version == "1.0.10"
        assert result.latest_version.build_number == 10010
        assert result.latest_version.download_url == "/api/v2/updates/download/1.0.10"

    async def test_up_to_date(self, check_handler, memory_release_repository, release_factory):
        await memory_release_repository.create(release_factory("1.0.10", 10010))

        result = await check_handler.handle(CheckForUpdateQuery(version="1.0.10", user_id="user-1"))

        assert result.update_available is False
        assert result.latest_version is None
        assert result.message == UP_TO_DATE_MESSAGE

    async def test_inactive_releases_are_not_offered(
        self, check_handler, memory_release_repository, release_factory
    ):
        await memory_release_repository.create(release_factory("1.0.9", 10009))
        newest = await memory_release_repository.create(release_factory("1.0.10", 10010))
        await memory_release_repository.save(newest.deactivate())

        result = await check_handler.handle(CheckForUpdateQuery(version="1.0.8", user_id="user-1"))

        assert result.latest_version.version == "1.0.9"

    async def test_offer_records_started_history(
        self,
        check_handler,
        memory_release_repository,
        memory_history_repository,
        release_factory,
        recorded_events,
    ):
        await memory_release_repository.create(release_factory("1.1.0", 10100))

        await check_handler.handle(
            CheckForUpdateQuery(
                version="1.0.0", user_id="user-1", platform="darwin", app_version="1.0.0"
            )
        )

        rows = list(memory_history_repository.rows.values())
        assert len(rows) == 1
        assert rows[0].status is UpdateStatus.STARTED
        assert rows[0].from_version == "1.0.0"
        assert rows[0].to_version == "1.1.0"
        assert rows[0].update_type == "manual"
        assert recorded_events.of_type(UpdateChecked)[0].offered_version == "1.1.0"

    async def test_no_history_when_up_to_date(
        self, check_handler, memory_history_repository
    ):
        await check_handler.handle(CheckForUpdateQuery(version="1.0.0", user_id="user-1"))

        assert memory_history_repository.rows == {}

    async def test_rejects_malformed_version(self, check_handler):
        with pytest.raises(InvalidVersionError):
            await check_handler.handle(CheckForUpdateQuery(version="latest", user_id="user-1"))


@pytest.mark.asyncio
class TestRecordHistoryStatusHandler:
    """Tests for RecordHistoryStatusHandler."""

    async def test_completed_closes_started_row(
        self,
        check_handler,
        memory_release_repository,
        memory_history_repository,
        release_factory,
        recorded_events,
    ):
        await memory_release_repository.create(release_factory("1.1.0", 10100))
        await check_handler.handle(CheckForUpdateQuery(version="1.0.0", user_id="user-1"))
        handler = RecordHistoryStatusHandler(history_repository=memory_history_repository)

        closed = await handler.handle(
            RecordHistoryStatusCommand(user_id="user-1", to_version="1.1.0", status="completed")
        )

        assert closed.status is UpdateStatus.COMPLETED
        assert closed.completed_at is not None
        assert recorded_events.of_type(UpdateStatusRecorded)[0].status == "completed"

    async def test_failed_keeps_completed_at_empty(
        self, check_handler, memory_release_repository, memory_history_repository, release_factory
    ):
        await memory_release_repository.create(release_factory("1.1.0", 10100))
        await check_handler.handle(CheckForUpdateQuery(version="1.0.0", user_id="user-1"))
        handler = RecordHistoryStatusHandler(history_repository=memory_history_repository)

        closed = await handler.handle(
            RecordHistoryStatusCommand(
                user_id="user-1",
                to_version="1.1.0",
                status="failed",
                error_message="Disk full",
            )
        )

        assert closed.status is UpdateStatus.FAILED
        assert closed.completed_at is None
        assert closed.error_message == "Disk full"

    async def test_without_started_row_is_ignored(self, memory_history_repository):
        handler = RecordHistoryStatusHandler(history_repository=memory_history_repository)

        result = await handler.handle(
            RecordHistoryStatusCommand(user_id="user-1", to_version="9.9.9", status="completed")
        )

        assert result is None
        assert memory_history_repository.rows == {}

    async def test_started_is_not_a_closing_status(self, memory_history_repository):
        handler = RecordHistoryStatusHandler(history_repository=memory_history_repository)

        with pytest.raises(InvalidHistoryStatusError):
            await handler.handle(
                RecordHistoryStatusCommand(user_id="user-1", to_version="1.1.0", status="started")
            )


@pytest.mark.asyncio
class TestReleaseAdministration:
    """Tests for download counting, listing, deactivation and statistics."""

    async def test_download_increments_counter(
        self, memory_release_repository, release_factory
    ):
        await memory_release_repository.create(release_factory("1.0.10", 10010))
        handler = DownloadArtifactHandler(release_repository=memory_release_repository)

        await handler.handle(DownloadArtifactCommand(version="1.0.10"))
        artifact = await handler.handle(DownloadArtifactCommand(version="1.0.10"))

        assert artifact.download_count == 2
        assert artifact.filename == "MacMan-1.0.10.dmg"

    async def test_download_unknown_version(self, memory_release_repository):
        handler = DownloadArtifactHandler(release_repository=memory_release_repository)

        with pytest.raises(ReleaseNotFoundError) as exc_info:
            await handler.handle(DownloadArtifactCommand(version="9.9.9"))

        assert exc_info.value.message == "Update version 9.9.9 not found"

    async def test_list_releases_newest_build_first(
        self, memory_release_repository, release_factory
    ):
        for version, build in (("1.0.9", 10009), ("1.0.10", 10010), ("1.0.8", 10008)):
            await memory_release_repository.create(release_factory(version, build))
        handler = ListReleasesHandler(release_repository=memory_release_repository)

        result = await handler.handle(ListReleasesQuery(page=1, limit=2))

        assert [r.version for r in result.updates] == ["1.0.10", "1.0.9"]
        assert result.pagination.pages == 2

    async def test_deactivate_release(self, memory_release_repository, release_factory):
        await memory_release_repository.create(release_factory("1.0.10", 10010))
        handler = DeactivateReleaseHandler(release_repository=memory_release_repository)

        result = await handler.handle(DeactivateReleaseCommand(version="1.0.10"))

        assert result.is_active is False

    async def test_deactivate_unknown_release(self, memory_release_repository):
        handler = DeactivateReleaseHandler(release_repository=memory_release_repository)

        with pytest.raises(ReleaseNotFoundError):
            await handler.handle(DeactivateReleaseCommand(version="9.9.9"))

    async def test_statistics(
        self,
        check_handler,
        memory_release_repository,
        memory_history_repository,
        release_factory,
    ):
        await memory_release_repository.create(release_factory("1.0.9", 10009))
        newest = await memory_release_repository.create(release_factory("1.0.10", 10010))
        await memory_release_repository.increment_download_count("1.0.10")
        await memory_release_repository.save(
            (await memory_release_repository.find_by_version("1.0.9")).deactivate()
        )
        await check_handler.handle(CheckForUpdateQuery(version="1.0.0", user_id="user-1"))
        handler = UpdateStatisticsHandler(
            release_repository=memory_release_repository,
            history_repository=memory_history_repository,
        )

        result = await handler.handle(GetUpdateStatisticsQuery())

        assert newest.download_count == 0
        assert result.total_updates == 2
        assert result.active_updates == 1
        assert result.total_downloads == 1
        assert result.recent_history == 1
