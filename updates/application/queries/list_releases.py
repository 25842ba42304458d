"""
ListReleasesQuery.
"""
from dataclasses import dataclass


@dataclass
class ListReleasesQuery:
    """Query for one page of releases, newest build first."""

    page: int = 1
    limit: int = 50
