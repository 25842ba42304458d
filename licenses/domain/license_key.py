"""
License key format and generation.

Keys look like ``MACMAN-XXXXX-XXXXX-XXXXX`` where every ``X`` is an
uppercase ASCII letter or digit.
"""
import re
import secrets
import string

LICENSE_KEY_PREFIX = "MACMAN"
SEGMENT_LENGTH = 5
SEGMENT_COUNT = 3
KEY_ALPHABET = string.ascii_uppercase + string.digits

LICENSE_KEY_PATTERN = re.compile(r"^MACMAN-[A-Z0-9]{5}-[A-Z0-9]{5}-[A-Z0-9]{5}$")


def is_valid_license_key_format(key: str) -> bool:
    """
    Check whether a string has the license key shape.

    Args:
        key: Candidate key

    Returns:
        True if the key matches ``MACMAN-XXXXX-XXXXX-XXXXX``
    """
    if not isinstance(key, str):
        return False
    return LICENSE_KEY_PATTERN.fullmatch(key) is not None


def generate_license_key() -> str:
    """
    Generate a random license key from the OS CSPRNG.

    Uniqueness is not guaranteed here; callers retry on a storage
    uniqueness violation.

    Returns:
        License key string
    """
    segments = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(SEGMENT_LENGTH))
        for _ in range(SEGMENT_COUNT)
    ]
    return "-".join([LICENSE_KEY_PREFIX, *segments])
