"""
GetUpdateStatisticsQuery.
"""
from dataclasses import dataclass


@dataclass
class GetUpdateStatisticsQuery:
    """Query for aggregate release and history counts."""

    window_days: int = 7
