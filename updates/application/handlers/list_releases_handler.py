"""
ListReleasesHandler.
"""

from core.domain.value_objects import Pagination
from updates.application.dto.update_dto import ReleaseDTO, ReleaseListDTO
from updates.application.queries.list_releases import ListReleasesQuery
from updates.ports.release_repository import ReleaseRepository


class ListReleasesHandler:
    """Handler for ListReleasesQuery."""

    def __init__(self, release_repository: ReleaseRepository):
        self.release_repository = release_repository

    async def handle(self, query: ListReleasesQuery) -> ReleaseListDTO:
        total = await self.release_repository.count()
        pagination = Pagination.of(query.page, query.limit, total)
        releases = await self.release_repository.list(pagination.offset, pagination.limit)
        return ReleaseListDTO(
            updates=[ReleaseDTO.from_entity(release) for release in releases],
            pagination=pagination,
        )
