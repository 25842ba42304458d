"""
ListLicensesQuery.
"""
from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Query for one page of licenses, newest first."""

    page: int = 1
    limit: int = 50
