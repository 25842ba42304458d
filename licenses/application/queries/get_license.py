"""
GetLicenseQuery.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query for a single license with devices and payments."""

    license_key: str
