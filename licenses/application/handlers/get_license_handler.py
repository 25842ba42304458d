"""
GetLicenseHandler.

Builds the admin detail view of a license: its active devices and its
payment history, both newest first.
"""

from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import LicenseNotFoundError
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.payment_repository import PaymentRepository


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        payment_repository: PaymentRepository,
    ):
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.payment_repository = payment_repository

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        """
        Handle get license query.

        Raises:
            LicenseNotFoundError: If the key does not exist
        """
        license = await self.license_repository.find_by_key(query.license_key)
        if license is None:
            raise LicenseNotFoundError()

        devices = await self.activation_repository.find_active_by_license(license.id)
        payments = await self.payment_repository.find_by_license(license.id)
        return LicenseDTO.from_entity(license, devices=devices, payments=payments)
