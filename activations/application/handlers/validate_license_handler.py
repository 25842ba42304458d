"""
ValidateLicenseHandler.

Runs the validation decision sequence and publishes its outcome.
"""

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.domain.events import DeviceActivated, LicenseValidated
from activations.domain.services import DEFAULT_PURCHASE_URL, LicenseValidator, ValidationResult
from activations.ports.activation_repository import ActivationRepository
from core.infrastructure.events import event_bus
from licenses.ports.license_repository import LicenseRepository


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        purchase_url: str = DEFAULT_PURCHASE_URL,
    ):
        self.validator = LicenseValidator(
            license_repository=license_repository,
            activation_repository=activation_repository,
            purchase_url=purchase_url,
        )

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResult:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResult; business failures are results, not exceptions
        """
        result = await self.validator.validate(
            license_key=command.license_key,
            machine_id=command.machine_id,
            device_name=command.device_name,
            os_version=command.os_version,
            app_version=command.app_version,
        )

        await event_bus.publish(
            LicenseValidated(
                license_key=command.license_key,
                machine_id=command.machine_id,
                outcome=result.outcome,
            )
        )
        if result.activated:
            await event_bus.publish(
                DeviceActivated(
                    activation_id=result.activation.id,
                    license_id=result.activation.license_id,
                    machine_id=result.activation.machine_id,
                    device_count=result.data.device_count,
                )
            )
        return result
