"""Routing error codes (machine-readable).

Codes follow the SUBJECT_REASON naming convention and are carried by every
RoutingError so callers can branch on the failure without parsing messages.
"""

from enum import Enum


class ErrorCode(Enum):
    """Routing error codes."""

    # Group configuration
    VERSION_REQUIRED = "version_required"
    INVALID_VERSION_ID = "invalid_version_id"
    INVALID_GROUP_OPTIONS = "invalid_group_options"
    INVALID_HANDLER = "invalid_handler"

    # Registry lifecycle
    REGISTRY_FROZEN = "registry_frozen"
    VERSION_NOT_REGISTERED = "version_not_registered"
    DEFAULT_VERSION_NOT_REGISTERED = "default_version_not_registered"
