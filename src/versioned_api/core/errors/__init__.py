"""Core errors package.

Usage:
    from versioned_api.core.errors import ConfigurationError, RoutingError
"""

from versioned_api.core.errors.routing_error import (
    ConfigurationError,
    RoutingError,
    VersionNotRegisteredError,
)

__all__ = [
    "ConfigurationError",
    "RoutingError",
    "VersionNotRegisteredError",
]
