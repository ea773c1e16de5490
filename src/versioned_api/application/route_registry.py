"""Route collection registry.

Maps version ids to their route collections. Populated during startup and
frozen before the first request is served; a version id, once registered,
stays for the life of the process.
"""

from collections.abc import Iterator

from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError, VersionNotRegisteredError
from versioned_api.domain.entities.route import Route
from versioned_api.domain.entities.route_collection import RouteCollection
from versioned_api.domain.value_objects.version_id import VersionId


class RouteCollectionRegistry:
    """Version id → RouteCollection.

    Example:
        >>> registry = RouteCollectionRegistry()
        >>> registry.register(VersionId("v1"), route)
        >>> registry.lookup(VersionId("v1")).routes
        (route,)
        >>> registry.lookup(VersionId("v9"))  # raises VersionNotRegisteredError
    """

    def __init__(self) -> None:
        self._collections: dict[VersionId, RouteCollection] = {}
        self._frozen = False

    def ensure(self, version: VersionId) -> RouteCollection:
        """Return the collection of ``version``, creating an empty one if needed.

        Raises:
            ConfigurationError: If the collection is missing and the registry is frozen.
        """
        collection = self._collections.get(version)
        if collection is None:
            if self._frozen:
                raise ConfigurationError(
                    ErrorCode.REGISTRY_FROZEN,
                    f"Cannot create API version {version!r}: "
                    "routes are frozen once dispatching starts",
                )
            collection = self._collections[version] = RouteCollection(version)
        return collection

    def register(self, version: VersionId, route: Route) -> None:
        """Append a route to the collection of ``version``, creating it on first use.

        Raises:
            ConfigurationError: If the registry is frozen.
        """
        self.ensure(version).add(route)

    def lookup(self, version: str) -> RouteCollection:
        """Return the collection registered for ``version``.

        Raises:
            VersionNotRegisteredError: If nothing was ever registered under it.
        """
        try:
            return self._collections[VersionId(version)]
        except KeyError:
            raise VersionNotRegisteredError(version) from None

    def has(self, version: str | None) -> bool:
        """Non-raising existence check."""
        return version is not None and version in self._collections

    def versions(self) -> tuple[VersionId, ...]:
        """Registered version ids in registration order."""
        return tuple(self._collections)

    def collections(self) -> tuple[RouteCollection, ...]:
        return tuple(self._collections.values())

    def freeze(self) -> None:
        """End the build phase; further registrations raise."""
        self._frozen = True
        for collection in self._collections.values():
            collection.freeze()

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, version: object) -> bool:
        return version in self._collections

    def __iter__(self) -> Iterator[VersionId]:
        return iter(self._collections)

    def __len__(self) -> int:
        return len(self._collections)
