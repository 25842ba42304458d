"""
DeactivateLicenseCommand.
"""
from dataclasses import dataclass


@dataclass
class DeactivateLicenseCommand:
    """Command to switch a license off."""

    license_key: str
