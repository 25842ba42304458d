"""
CreateLicenseCommand.

Command to mint a new license key for a plan.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """Command to create a license."""

    plan: str
    email: Optional[str] = None
    max_devices: Optional[int] = None
    expires_at: Optional[datetime] = None
