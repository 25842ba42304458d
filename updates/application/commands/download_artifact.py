"""
DownloadArtifactCommand.
"""
from dataclasses import dataclass


@dataclass
class DownloadArtifactCommand:
    """Command to count a download and fetch artifact metadata."""

    version: str
