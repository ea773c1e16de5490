"""Routing entities."""

from versioned_api.domain.entities.route import (
    HTTPMethod,
    Route,
    RouteAction,
    RouteMatch,
    join_uri,
    methods_of,
)
from versioned_api.domain.entities.route_collection import RouteCollection

__all__ = [
    "HTTPMethod",
    "Route",
    "RouteAction",
    "RouteCollection",
    "RouteMatch",
    "join_uri",
    "methods_of",
]
