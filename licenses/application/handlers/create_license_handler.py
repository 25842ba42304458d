"""
CreateLicenseHandler.

Mints a license key for a plan. Key collisions reported by storage are
retried with a fresh key a bounded number of times.
"""

import logging

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseKeyGenerationError
from core.domain.value_objects import Email, Plan
from core.infrastructure.events import event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseCreated
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 5


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, key_generator=generate_license_key):
        self.license_repository = license_repository
        self.key_generator = key_generator

    async def handle(self, command: CreateLicenseCommand) -> LicenseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            LicenseDTO of the stored license

        Raises:
            InvalidPlanError: If the plan is unknown
            ValidationFailure: If the email or device override is malformed
            LicenseKeyGenerationError: If no unique key could be stored
        """
        plan = Plan.from_value(command.plan)
        email = str(Email(command.email)) if command.email else None

        for attempt in range(1, MAX_KEY_ATTEMPTS + 1):
            license = License.create(
                license_key=self.key_generator(),
                plan=plan,
                email=email,
                max_devices=command.max_devices,
                expires_at=command.expires_at,
            )
            try:
                saved = await self.license_repository.create(license)
            except DuplicateLicenseKeyError:
                logger.warning("License key collision on attempt %s, regenerating", attempt)
                continue

            logger.info("Created license %s for plan %s", saved.license_key, plan.value)
            await event_bus.publish(
                LicenseCreated(
                    license_id=saved.id,
                    license_key=saved.license_key,
                    plan=plan.value,
                    max_devices=saved.max_devices,
                )
            )
            return LicenseDTO.from_entity(saved)

        raise LicenseKeyGenerationError(
            f"Could not generate a unique license key after {MAX_KEY_ATTEMPTS} attempts"
        )
