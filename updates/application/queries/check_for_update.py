"""
CheckForUpdateQuery.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CheckForUpdateQuery:
    """
    Query sent by the desktop client to look for a newer release.

    Answering it records a started history row when a release is offered.
    """

    version: str
    user_id: str
    platform: str = "darwin"
    app_version: Optional[str] = None
