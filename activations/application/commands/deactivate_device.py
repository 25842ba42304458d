"""
DeactivateDeviceCommand.
"""

from dataclasses import dataclass


@dataclass
class DeactivateDeviceCommand:
    """Command to free the device slot held by a machine."""

    license_key: str
    machine_id: str
