"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass


@dataclass
class DeactivateDeviceResponseDTO:
    """DTO for deactivate device response."""

    license_key: str
    machine_id: str
    device_count: int
    message: str
