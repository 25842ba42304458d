"""
ValidateLicenseCommand.

Command sent by the desktop client on launch to validate its key.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license key for a machine."""

    license_key: str
    machine_id: str
    device_name: Optional[str] = None
    os_version: Optional[str] = None
    app_version: Optional[str] = None
