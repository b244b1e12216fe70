# core/version.py - SINGLE SOURCE OF TRUTH for version strings
"""
This is the ONLY place where VERSION is defined.
All other modules MUST import VERSION from here.

Also holds the minimum provider version and the comparison helpers used
by the capability check. Versions are compared component-wise as integers,
never as strings ("1.10.0" is newer than "1.6.0").
"""

from typing import Tuple

VERSION = "0.3.0"

# Oldest gocryptfs release whose -init/-passwd/mount flags we rely on
MIN_PROVIDER_VERSION = "1.6.0"


def parse_version(version_str: str) -> Tuple[int, int, int]:
    """
    Parse a MAJOR[.MINOR[.PATCH]] string into an integer triple.

    Missing components are padded with zeros, so "1.2" == (1, 2, 0).

    Raises:
        ValueError: If the string is empty, has more than 3 parts, or a
            component is not a non-negative integer.
    """
    if not version_str or not isinstance(version_str, str) or not version_str.strip():
        raise ValueError(f"Invalid version string: {version_str!r}")

    parts = version_str.strip().split(".")
    if len(parts) > 3:
        raise ValueError(f"Version must have 1-3 parts: {version_str!r}")

    numbers = []
    for part in parts:
        if not part.isdigit():
            raise ValueError(f"Invalid version component {part!r} in {version_str!r}")
        numbers.append(int(part))

    while len(numbers) < 3:
        numbers.append(0)

    return numbers[0], numbers[1], numbers[2]


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 as left is older than, equal to, or newer than right."""
    a = parse_version(left)
    b = parse_version(right)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def version_satisfies(found: str, required: str = MIN_PROVIDER_VERSION) -> bool:
    """True if ``found`` is at least ``required``."""
    return compare_versions(found, required) >= 0
