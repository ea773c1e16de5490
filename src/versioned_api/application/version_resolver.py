"""Version resolution.

Turns the parsed Accept header (or its absence) into the context a request
is dispatched under:

1. The requested version, when a collection is registered for it.
2. Otherwise the configured default version, which must itself be registered.

Versions compare by exact string equality: a request for ``v2`` never lands
on a ``v2.0.1`` collection.
"""

from collections.abc import Callable, Container
from dataclasses import dataclass

from versioned_api.application.route_registry import RouteCollectionRegistry
from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError
from versioned_api.core.result import Failure, Result, Success
from versioned_api.domain.value_objects.media_type import AcceptHeader
from versioned_api.domain.value_objects.negotiated_context import (
    NegotiatedRequestContext,
)
from versioned_api.domain.value_objects.version_id import VersionId


@dataclass(frozen=True, slots=True, kw_only=True)
class NegotiationDefaults:
    """Fallbacks applied when the Accept header is silent or unusable."""

    vendor: str
    version: VersionId
    format: str


class VersionResolver:
    """Resolve a NegotiatedRequestContext against the registry.

    Args:
        registry: Registry consulted for registered versions.
        defaults: Callable returning the current defaults; called on every
            resolution so router setters take effect without rebuilding.
        formats: Format tokens a formatter exists for.
    """

    def __init__(
        self,
        registry: RouteCollectionRegistry,
        defaults: Callable[[], NegotiationDefaults],
        formats: Container[str],
    ) -> None:
        self._registry = registry
        self._defaults = defaults
        self._formats = formats

    def resolve(
        self,
        accept: AcceptHeader | None,
        *,
        internal: bool = False,
    ) -> Result[NegotiatedRequestContext, ConfigurationError]:
        """Resolve the version, format and vendor for one request.

        Returns:
            Success with the context, or Failure when the default version is
            needed but not registered.
        """
        defaults = self._defaults()

        if accept is not None and self._registry.has(accept.version):
            version = accept.version
        elif self._registry.has(defaults.version):
            version = defaults.version
        else:
            return Failure(
                error=ConfigurationError(
                    ErrorCode.DEFAULT_VERSION_NOT_REGISTERED,
                    f"Default API version {defaults.version!r} is not registered",
                )
            )

        if accept is not None and accept.format in self._formats:
            response_format = accept.format
        else:
            response_format = defaults.format

        return Success(
            value=NegotiatedRequestContext(
                vendor=defaults.vendor,
                version=version,
                format=response_format,
                internal=internal,
            )
        )
