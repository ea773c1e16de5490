"""Version identifier value object.

A version id names one route collection (``v1``, ``v2.0.1``, ``beta``). Ids
are opaque: they compare by exact string equality only, so ``v2`` and
``v2.0`` are different collections and no range matching ever happens.

Only ``version_id()`` should mint a VersionId; it rejects ids that would be
ambiguous inside a media type (whitespace, empty dot-separated segments).
"""

import re
from typing import NewType

from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError

VersionId = NewType("VersionId", str)

# Dot-separated alphanumeric segments: v1, v1.1, v2.0.1, 2024.01
VERSION_ID_PATTERN = r"[A-Za-z0-9]+(?:\.[A-Za-z0-9]+)*"

_VERSION_ID_RE = re.compile(VERSION_ID_PATTERN)


def version_id(value: str) -> VersionId:
    """Validate and wrap a raw version string.

    Args:
        value: Raw version id (e.g. "v1", "v2.0.1").

    Returns:
        VersionId: The validated id, unchanged.

    Raises:
        ConfigurationError: If the id is empty or malformed.

    Example:
        >>> version_id("v2.0.1")
        'v2.0.1'
        >>> version_id("v2.")  # raises ConfigurationError
    """
    if not isinstance(value, str) or not _VERSION_ID_RE.fullmatch(value):
        raise ConfigurationError(
            ErrorCode.INVALID_VERSION_ID,
            f"Invalid API version id: {value!r}",
        )
    return VersionId(value)
