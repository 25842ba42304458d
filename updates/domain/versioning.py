"""
Version ordering helpers.

Releases are ordered by a weighted build number rather than by general
semantic-version rules: ``major * 10000 + minor * 100 + patch``. Each
component must stay below 100; larger components overlap the next
position and silently corrupt ordering. That precondition is documented,
not enforced.
"""
import hashlib
from typing import BinaryIO, List

from core.domain.exceptions import InvalidVersionError

BUILD_WEIGHTS = (10000, 100, 1)


def _components(version: str) -> List[int]:
    if not isinstance(version, str) or not version.strip():
        raise InvalidVersionError("Version is required")
    try:
        return [int(part) for part in version.strip().split(".")]
    except ValueError:
        raise InvalidVersionError(f"Invalid version '{version}'") from None


def version_to_build_number(version: str) -> int:
    """
    Convert a dotted version to its weighted build number.

    Missing minor/patch components count as 0; components past the third
    are ignored.

    >>> version_to_build_number("1.0.8")
    10008
    >>> version_to_build_number("1.2")
    10200

    Raises:
        InvalidVersionError: If a component is not an integer
    """
    parts = _components(version)[: len(BUILD_WEIGHTS)]
    return sum(part * weight for part, weight in zip(parts, BUILD_WEIGHTS))


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two dotted versions component by component.

    Returns:
        1 if v1 is newer, -1 if older, 0 if equal
    """
    parts1 = _components(v1)
    parts2 = _components(v2)
    for i in range(max(len(parts1), len(parts2))):
        a = parts1[i] if i < len(parts1) else 0
        b = parts2[i] if i < len(parts2) else 0
        if a != b:
            return 1 if a > b else -1
    return 0


def generate_checksum(data: bytes) -> str:
    """SHA-256 hex digest of an artifact."""
    return hashlib.sha256(data).hexdigest()


CHECKSUM_CHUNK_SIZE = 1024 * 1024


def generate_file_checksum(artifact: BinaryIO, chunk_size: int = CHECKSUM_CHUNK_SIZE) -> str:
    """SHA-256 hex digest of an open artifact, read in chunks."""
    digest = hashlib.sha256()
    for chunk in iter(lambda: artifact.read(chunk_size), b""):
        digest.update(chunk)
    return digest.hexdigest()
