"""Core shared kernel.

Foundational pieces used across all layers:
- Result types for railway-oriented programming
- Routing error hierarchy and error codes
- Settings and the composition root (container)
"""

from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import (
    ConfigurationError,
    RoutingError,
    VersionNotRegisteredError,
)
from versioned_api.core.result import Failure, Result, Success

__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "Failure",
    "Result",
    "RoutingError",
    "Success",
    "VersionNotRegisteredError",
]
