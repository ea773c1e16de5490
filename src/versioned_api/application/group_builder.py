"""Route group builders.

``Router.api()`` and ``Router.group()`` hand a builder to the registration
callback. The builder carries the group's options explicitly, so every route
registered through it (or through a nested ``group()``) inherits the prefix,
domain, protection flag and scopes without any hidden global state:

    def register(api: ApiGroupBuilder) -> None:
        api.get("users", list_users)
        api.group({"prefix": "admin", "protected": True}, register_admin)

    router.api({"version": ["v1", "v2"], "prefix": "api", "scopes": "read"}, register)

API builders insert each route into the collection of every version of the
group; plain builders insert into the version-agnostic plain collection.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from versioned_api.application.controller_inspector import (
    ControllerInspector,
    HandlerTarget,
    InspectedHandler,
)
from versioned_api.application.route_registry import RouteCollectionRegistry
from versioned_api.core.enums import ErrorCode
from versioned_api.core.errors import ConfigurationError
from versioned_api.domain.entities.route import (
    HTTPMethod,
    Route,
    RouteAction,
    join_uri,
    methods_of,
)
from versioned_api.domain.protocols.logger_protocol import LoggerProtocol
from versioned_api.domain.value_objects.version_id import VersionId, version_id


# =============================================================================
# Group options
# =============================================================================


class GroupAttributes(BaseModel):
    """Options shared by plain and API groups.

    Attributes:
        prefix: Path prefix (slashes stripped); nested prefixes are joined.
        domain: Domain template; a nested domain replaces the outer one.
        protected: Protection flag; None inherits (and finally means False).
        scopes: Scopes appended after the enclosing group's scopes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: str | None = None
    domain: str | None = None
    protected: bool | None = None
    scopes: tuple[str, ...] = ()

    @field_validator("scopes", mode="before")
    @classmethod
    def normalize_scopes(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("prefix", "domain")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        if v is None:
            return None
        cleaned = v.strip().strip("/")
        return cleaned or None


class GroupOptions(GroupAttributes):
    """Options of an API group.

    Attributes:
        version: One or more version ids; a string, or a sequence/set of
            strings. Sets are ordered for determinism, duplicates dropped.
    """

    version: tuple[VersionId, ...]

    @field_validator("version", mode="before")
    @classmethod
    def normalize_versions(cls, v: Any) -> tuple[VersionId, ...]:
        if isinstance(v, str):
            raw: Iterable[Any] = (v,)
        elif isinstance(v, (set, frozenset)):
            raw = sorted(v)
        else:
            raw = v

        versions: list[VersionId] = []
        for item in raw:
            try:
                vid = version_id(item)
            except ConfigurationError as exc:
                raise ValueError(exc.message) from exc
            if vid not in versions:
                versions.append(vid)
        if not versions:
            raise ValueError("at least one version is required")
        return tuple(versions)


def parse_group_attributes(attributes: GroupAttributes | Mapping[str, Any]) -> GroupAttributes:
    """Validate plain/nested group options.

    Raises:
        ConfigurationError: If the options are malformed.
    """
    if isinstance(attributes, GroupAttributes):
        return attributes
    try:
        return GroupAttributes.model_validate(dict(attributes))
    except ValidationError as exc:
        raise ConfigurationError(
            ErrorCode.INVALID_GROUP_OPTIONS, f"Invalid route group options: {exc}"
        ) from exc


def parse_group_options(options: GroupOptions | Mapping[str, Any]) -> GroupOptions:
    """Validate API group options.

    Raises:
        ConfigurationError: If ``version`` is missing or empty, or any
            option is malformed.
    """
    if isinstance(options, GroupOptions):
        return options
    if not options.get("version"):
        raise ConfigurationError(
            ErrorCode.VERSION_REQUIRED,
            "API route groups require at least one version",
        )
    try:
        return GroupOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise ConfigurationError(
            ErrorCode.INVALID_GROUP_OPTIONS, f"Invalid API group options: {exc}"
        ) from exc


# =============================================================================
# Group context
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupContext:
    """Options in effect for routes registered through one builder."""

    prefix: str | None = None
    domain: str | None = None
    protected: bool | None = None
    scopes: tuple[str, ...] = ()
    versions: tuple[VersionId, ...] = ()

    def merge(self, attributes: GroupAttributes) -> "GroupContext":
        """Context for a group nested inside this one."""
        prefix = "/".join(p for p in (self.prefix, attributes.prefix) if p) or None
        return GroupContext(
            prefix=prefix,
            domain=attributes.domain or self.domain,
            protected=(
                attributes.protected
                if attributes.protected is not None
                else self.protected
            ),
            scopes=self.scopes + attributes.scopes,
            versions=self.versions,
        )

    def action_for(self, inspected: InspectedHandler) -> RouteAction:
        """Merge group options with the handler's declared metadata.

        Protection: method flag, else class flag, else group flag, else False.
        Scopes: group, then class, then method; duplicates are kept.
        """
        declared = (
            inspected.method_metadata.protected,
            inspected.class_metadata.protected,
            self.protected,
        )
        protected = next((flag for flag in declared if flag is not None), False)
        return RouteAction(
            protected=protected,
            scopes=(
                self.scopes
                + inspected.class_metadata.scopes
                + inspected.method_metadata.scopes
            ),
            domain=self.domain,
            prefix=self.prefix,
            versions=frozenset(self.versions),
        )


# =============================================================================
# Builders
# =============================================================================


class RouteRegistrar:
    """Registers routes with the options of its group context.

    Args:
        context: Options applied to every route registered here.
        inspector: Resolves handler targets and their metadata.
        store: Receives each built route.
        logger: Structured logger.
    """

    def __init__(
        self,
        *,
        context: GroupContext,
        inspector: ControllerInspector,
        store: Callable[[Route], None],
        logger: LoggerProtocol,
    ) -> None:
        self._context = context
        self._inspector = inspector
        self._store = store
        self._logger = logger

    @property
    def context(self) -> GroupContext:
        return self._context

    def get(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match((HTTPMethod.GET, HTTPMethod.HEAD), uri, handler)

    def post(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match((HTTPMethod.POST,), uri, handler)

    def put(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match((HTTPMethod.PUT,), uri, handler)

    def patch(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match((HTTPMethod.PATCH,), uri, handler)

    def delete(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match((HTTPMethod.DELETE,), uri, handler)

    def options(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match((HTTPMethod.OPTIONS,), uri, handler)

    def any(self, uri: str, handler: HandlerTarget) -> Route:
        return self.match(tuple(HTTPMethod), uri, handler)

    def match(
        self,
        methods: Iterable[str | HTTPMethod],
        uri: str,
        handler: HandlerTarget,
    ) -> Route:
        """Register ``handler`` for several methods on ``uri``."""
        inspected = self._inspector.inspect(handler)
        route = Route(
            methods=methods_of(methods),
            uri=join_uri(self._context.prefix, uri),
            handler=inspected.handler,
            action=self._context.action_for(inspected),
        )
        self._store(route)
        return route

    def group(
        self,
        attributes: GroupAttributes | Mapping[str, Any],
        callback: Callable[[Self], None],
    ) -> None:
        """Register routes in a nested group inheriting this group's options."""
        nested = self._context.merge(parse_group_attributes(attributes))
        callback(self._with_context(nested))

    def _with_context(self, context: GroupContext) -> Self:
        return type(self)(
            context=context,
            inspector=self._inspector,
            store=self._store,
            logger=self._logger,
        )


class ApiGroupBuilder(RouteRegistrar):
    """Registrar whose routes land in every version collection of its group."""

    def __init__(
        self,
        *,
        registry: RouteCollectionRegistry,
        context: GroupContext,
        inspector: ControllerInspector,
        logger: LoggerProtocol,
        store: Callable[[Route], None] | None = None,
    ) -> None:
        super().__init__(
            context=context,
            inspector=inspector,
            store=store or self._register,
            logger=logger,
        )
        self._registry = registry
        for version in context.versions:
            registry.ensure(version)

    @property
    def versions(self) -> tuple[VersionId, ...]:
        return self._context.versions

    def _register(self, route: Route) -> None:
        for version in self._context.versions:
            self._registry.register(version, route)
        self._logger.debug(
            "API route registered",
            versions=list(self._context.versions),
            methods=sorted(m.value for m in route.methods),
            uri=route.uri,
            protected=route.action.protected,
            scopes=list(route.action.scopes),
        )

    def _with_context(self, context: GroupContext) -> Self:
        return type(self)(
            registry=self._registry,
            context=context,
            inspector=self._inspector,
            logger=self._logger,
        )
