"""
GetLicenseStatisticsQuery.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseStatisticsQuery:
    """Query for aggregate license counts."""
