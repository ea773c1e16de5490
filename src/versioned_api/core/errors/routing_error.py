"""Routing error hierarchy.

Unlike HTTP failures raised by handlers, these errors describe a broken
routing configuration: grouping without a version, malformed version ids,
registering after the registry was frozen, or asking for a version that was
never registered. They are raised at build time, or surfaced as a 500 when
they escape during dispatch.

Hierarchy:
    RoutingError
    └── ConfigurationError
        └── VersionNotRegisteredError
"""

from versioned_api.core.enums import ErrorCode


class RoutingError(Exception):
    """Base class for all routing errors.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ConfigurationError(RoutingError):
    """The routing configuration is invalid or incomplete."""


class VersionNotRegisteredError(ConfigurationError):
    """A route collection was requested for a version that does not exist.

    Attributes:
        version: The version id that was looked up.
    """

    def __init__(self, version: str) -> None:
        super().__init__(
            ErrorCode.VERSION_NOT_REGISTERED,
            f"No API route collection registered for version '{version}'",
        )
        self.version = version
