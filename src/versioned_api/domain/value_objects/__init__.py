"""Domain value objects (immutable, compared by value)."""

from versioned_api.domain.value_objects.media_type import AcceptHeader
from versioned_api.domain.value_objects.negotiated_context import (
    NegotiatedRequestContext,
)
from versioned_api.domain.value_objects.version_id import (
    VERSION_ID_PATTERN,
    VersionId,
    version_id,
)

__all__ = [
    "AcceptHeader",
    "NegotiatedRequestContext",
    "VERSION_ID_PATTERN",
    "VersionId",
    "version_id",
]
