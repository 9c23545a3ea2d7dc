"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Version utilities for OASGEN.
Provides parsing and comparison of dotted version strings such as "2.0" or "3.0.1".
"""

import re

_VERSION_RE = re.compile(r"^\s*v?(\d+(?:\.\d+)*)(.*)$")


def parse_version(version: str) -> tuple[tuple[int, ...], str]:
    """
    Parse a version string into a comparable form.

    Missing trailing components count as zero, so "3" == "3.0" == "3.0.0".

    Returns:
        Tuple of the numeric components (trailing zeros stripped) and the suffix

    """
    match = _VERSION_RE.match(version or "")
    if not match:
        raise ValueError(f"Version {version!r} does not follow semver format")

    numbers, suffix = match.groups()
    components = [int(part) for part in numbers.split(".")]
    while len(components) > 1 and components[-1] == 0:
        components.pop()
    return tuple(components), suffix.strip().lstrip("-+.")


def version_compare(left: str, right: str) -> int:
    """
    Compare two version strings.

    A version with a pre-release suffix sorts before the same version without
    one ("3.0.0-rc1" < "3.0.0").

    Returns:
        -1, 0 or 1 when left is lower than, equal to or greater than right

    """
    left_numbers, left_suffix = parse_version(left)
    right_numbers, right_suffix = parse_version(right)

    if left_numbers != right_numbers:
        return -1 if left_numbers < right_numbers else 1

    if left_suffix == right_suffix:
        return 0
    if not left_suffix:
        return 1
    if not right_suffix:
        return -1
    return -1 if left_suffix < right_suffix else 1


def is_at_least(version: str, minimum: str) -> bool:
    """Return True when version >= minimum."""
    return version_compare(version, minimum) >= 0
