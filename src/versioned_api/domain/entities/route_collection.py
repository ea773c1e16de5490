"""Ordered route collection."""

from collections.abc import Iterator

from starlette.routing import Match

from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError
from versioned_api.domain.entities.route import HTTPMethod, Route, RouteMatch
from versioned_api.domain.value_objects.version_id import VersionId


class RouteCollection:
    """Routes in registration order; the first structural match wins.

    An API collection is keyed by one version id; the plain, version-agnostic
    collection has ``version`` None. Once frozen the collection rejects new
    routes.
    """

    def __init__(self, version: VersionId | None = None) -> None:
        self._version = version
        self._routes: list[Route] = []
        self._frozen = False

    @property
    def version(self) -> VersionId | None:
        return self._version

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, route: Route) -> Route:
        """Append a route.

        Raises:
            ConfigurationError: If the collection is frozen.
        """
        if self._frozen:
            raise ConfigurationError(
                ErrorCode.REGISTRY_FROZEN,
                f"Cannot add {route.uri!r}: routes are frozen once dispatching starts",
            )
        self._routes.append(route)
        return route

    def freeze(self) -> None:
        self._frozen = True

    def match(self, method: str, path: str, host: str) -> RouteMatch | None:
        """Return the first route fully matching method, path and host."""
        for route in self._routes:
            match, params = route.matches(method, path, host)
            if match is Match.FULL:
                return RouteMatch(route, params)
        return None

    def allowed_methods(self, path: str, host: str) -> frozenset[HTTPMethod]:
        """Methods answered by routes whose path and host match."""
        allowed: set[HTTPMethod] = set()
        for route in self._routes:
            match, _ = route.matches("", path, host)
            if match is not Match.NONE:
                allowed.update(route.methods)
        return frozenset(allowed)

    def claims(self, path: str, host: str) -> bool:
        """Whether any route in the collection claims the request."""
        return any(route.claims(path, host) for route in self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, route: object) -> bool:
        return route in self._routes

    def __repr__(self) -> str:
        return f"RouteCollection(version={self._version!r}, routes={len(self._routes)})"
