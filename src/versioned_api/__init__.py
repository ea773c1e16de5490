"""Versioned API routing.

Groups routes under API versions, negotiates the version a request targets
from a vendor media type in the ``Accept`` header, dispatches against the
matching route collection and turns failures into negotiated error responses.

Usage:
    from versioned_api import ApiRequest, Router

    router = Router(vendor="acme", default_version="v1")
    router.api({"version": "v1"}, lambda api: api.get("users", list_users))

    response = router.dispatch(
        ApiRequest.create("users", headers={"accept": "application/vnd.acme.v1+json"})
    )
"""

from versioned_api.application.controller_inspector import action, controller
from versioned_api.core.errors import (
    ConfigurationError,
    RoutingError,
    VersionNotRegisteredError,
)
from versioned_api.presentation.errors import ErrorBag, ResourceError
from versioned_api.presentation.http import ApiRequest, ApiResponse
from versioned_api.presentation.router import Router

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "ConfigurationError",
    "ErrorBag",
    "ResourceError",
    "Router",
    "RoutingError",
    "VersionNotRegisteredError",
    "action",
    "controller",
]
