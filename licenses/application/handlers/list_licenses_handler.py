"""
ListLicensesHandler.
"""

from activations.ports.activation_repository import ActivationRepository
from core.domain.value_objects import Pagination
from licenses.application.dto.license_dto import LicenseDTO, LicenseListDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.payment_repository import PaymentRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        payment_repository: PaymentRepository,
    ):
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.payment_repository = payment_repository

    async def handle(self, query: ListLicensesQuery) -> LicenseListDTO:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            LicenseListDTO with licenses newest first and page metadata
        """
        total = await self.license_repository.count()
        pagination = Pagination.of(query.page, query.limit, total)
        licenses = await self.license_repository.list(pagination.offset, pagination.limit)

        items = []
        for license in licenses:
            devices = await self.activation_repository.find_active_by_license(license.id)
            payments = await self.payment_repository.find_by_license(license.id)
            items.append(LicenseDTO.from_entity(license, devices=devices, payments=payments))

        return LicenseListDTO(licenses=items, pagination=pagination)
