"""
DeactivateReleaseCommand.
"""
from dataclasses import dataclass


@dataclass
class DeactivateReleaseCommand:
    """Command to withdraw a release from update checks."""

    version: str
