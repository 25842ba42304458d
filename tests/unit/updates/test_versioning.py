"""
Unit tests for version ordering helpers.
"""
import hashlib
import io

import pytest

from core.domain.exceptions import InvalidVersionError
from updates.domain.versioning import (
    compare_versions,
    generate_checksum,
    generate_file_checksum,
    version_to_build_number,
)


class TestVersionToBuildNumber:
    """Tests for version_to_build_number."""

    @pytest.mark.parametrize(
        "version,build",
        [
            ("1.0.8", 10008),
            ("1.2.0", 10200),
            ("1.0.10", 10010),
            ("2.0.0", 20000),
            ("0.0.1", 1),
            ("1.2", 10200),
            ("3", 30000),
        ],
    )
    def test_weighted_build_number(self, version, build):
        assert version_to_build_number(version) == build

    def test_weighted_order_beats_lexical_order(self):
        assert version_to_build_number("1.0.10") > version_to_build_number("1.0.9")
        assert "1.0.10" < "1.0.9"

    @pytest.mark.parametrize("version", ["", "1.x.0", "abc", "1..2", None])
    def test_rejects_non_numeric_versions(self, version):
        with pytest.raises(InvalidVersionError):
            version_to_build_number(version)


class TestCompareVersions:
    """Tests for compare_versions."""

    @pytest.mark.parametrize(
        "v1,v2,expected",
        [
            ("1.0.10", "1.0.9", 1),
            ("1.0.9", "1.0.10", -1),
            ("1.2", "1.2.0", 0),
            ("2.0.0", "1.99.99", 1),
        ],
    )
    def test_compare(self, v1, v2, expected):
        assert compare_versions(v1, v2) == expected


def test_generate_checksum_is_sha256_hex():
    data = b"disk image bytes"
    assert generate_checksum(data) == hashlib.sha256(data).hexdigest()
    assert len(generate_checksum(b"")) == 64


def test_generate_file_checksum_reads_in_chunks():
    data = b"0123456789" * 1000
    artifact = io.BytesIO(data)

    assert generate_file_checksum(artifact, chunk_size=64) == hashlib.sha256(data).hexdigest()
    assert generate_file_checksum(io.BytesIO(b"")) == generate_checksum(b"")
