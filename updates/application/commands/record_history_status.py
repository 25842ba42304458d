"""
RecordHistoryStatusCommand.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RecordHistoryStatusCommand:
    """Command sent by a client once an update attempt finished."""

    user_id: str
    to_version: str
    status: str
    error_message: Optional[str] = None
