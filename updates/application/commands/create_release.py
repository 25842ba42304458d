"""
CreateReleaseCommand.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateReleaseCommand:
    """Command to publish a release."""

    version: str
    build_number: int
    release_type: str
    filename: str
    file_size: int
    checksum: str
    release_notes: Optional[str] = None
    force_update: bool = False
