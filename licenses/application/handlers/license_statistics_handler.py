"""
LicenseStatisticsHandler.
"""

from activations.ports.activation_repository import ActivationRepository
from licenses.application.dto.license_dto import LicenseStatisticsDTO
from licenses.application.queries.get_license_statistics import GetLicenseStatisticsQuery
from licenses.ports.license_repository import LicenseRepository


class LicenseStatisticsHandler:
    """Handler for GetLicenseStatisticsQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
    ):
        self.license_repository = license_repository
        self.activation_repository = activation_repository

    async def handle(self, query: GetLicenseStatisticsQuery) -> LicenseStatisticsDTO:
        stats = await self.license_repository.statistics()
        total_activations = await self.activation_repository.count_active()
        return LicenseStatisticsDTO(
            total_licenses=stats["total_licenses"],
            active_licenses=stats["active_licenses"],
            total_activations=total_activations,
            licenses_by_plan=stats["licenses_by_plan"],
        )
