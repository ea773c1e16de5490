"""Route entity and its action metadata.

Path and domain templates (``users/{user_id:int}``, ``{tenant}.example.com``)
are compiled with Starlette's ``compile_path``, the same engine behind
``starlette.routing.Route`` and ``Host``; this module only decides how a
request's method, path and host are checked against them.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from starlette.convertors import Convertor
from starlette.datastructures import URL
from starlette.routing import Match, compile_path

from versioned_api.domain.value_objects.version_id import VersionId


class HTTPMethod(str, Enum):
    """HTTP methods a route can answer."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


def join_uri(*parts: str | None) -> str:
    """Join prefix and path fragments into a rooted path.

    Example:
        >>> join_uri("foo/bar", "/foo")
        '/foo/bar/foo'
        >>> join_uri(None, "/")
        '/'
    """
    segments = [part.strip("/") for part in parts if part and part.strip("/")]
    return "/" + "/".join(segments)


@dataclass(frozen=True, kw_only=True)
class RouteAction:
    """Options baked into a route when it was registered.

    Attributes:
        protected: Whether the route requires an authenticated caller.
        scopes: Scopes required by the route, group scopes first.
        domain: Domain template the route is bound to, if any.
        prefix: Prefix the route was registered under, if any.
        versions: Every version the route was registered under (empty for
            plain routes).
    """

    protected: bool = False
    scopes: tuple[str, ...] = ()
    domain: str | None = None
    prefix: str | None = None
    versions: frozenset[VersionId] = frozenset()

    def as_dict(self) -> dict[str, Any]:
        """Return the action as a plain mapping."""
        return {
            "protected": self.protected,
            "scopes": list(self.scopes),
            "domain": self.domain,
            "prefix": self.prefix,
            "version": sorted(self.versions),
        }


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """A route selected for a request plus its converted path parameters."""

    route: "Route"
    params: dict[str, Any]


@dataclass(frozen=True, kw_only=True)
class Route:
    """A single method(s) + path template + handler binding.

    The same immutable Route is shared by every version collection it was
    registered under.

    Attributes:
        methods: Methods answered by the route.
        uri: Full path template including any prefix (always rooted).
        handler: Callable invoked with the path parameters as keyword arguments.
        action: Options the route was registered with.
    """

    methods: frozenset[HTTPMethod]
    uri: str
    handler: Callable[..., Any]
    action: RouteAction = field(default_factory=RouteAction)

    _path_regex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _path_convertors: dict[str, Convertor[Any]] = field(
        init=False, repr=False, compare=False
    )
    _host_regex: re.Pattern[str] | None = field(init=False, repr=False, compare=False)
    _host_convertors: dict[str, Convertor[Any]] = field(
        init=False, repr=False, compare=False
    )
    _prefix_regexes: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        path_regex, _, path_convertors = compile_path(join_uri(self.uri))
        object.__setattr__(self, "_path_regex", path_regex)
        object.__setattr__(self, "_path_convertors", path_convertors)

        if self.action.domain:
            host_regex, _, host_convertors = compile_path(self.action.domain)
            object.__setattr__(self, "_host_regex", host_regex)
            object.__setattr__(self, "_host_convertors", host_convertors)
        else:
            object.__setattr__(self, "_host_regex", None)
            object.__setattr__(self, "_host_convertors", {})

        prefix_regexes: tuple[re.Pattern[str], ...] = ()
        if self.action.prefix:
            prefix = join_uri(self.action.prefix)
            prefix_regexes = (
                compile_path(prefix)[0],
                compile_path(f"{prefix}/{{_tail:path}}")[0],
            )
        object.__setattr__(self, "_prefix_regexes", prefix_regexes)

    def allows(self, method: str) -> bool:
        """Whether the route answers the given method."""
        return method.upper() in {m.value for m in self.methods}

    def matches(self, method: str, path: str, host: str) -> tuple[Match, dict[str, Any]]:
        """Check a request against this route.

        Returns:
            (Match.FULL, params) when path, domain and method match;
            (Match.PARTIAL, params) when only the method differs;
            (Match.NONE, {}) otherwise.
        """
        params: dict[str, Any] = {}

        if self._host_regex is not None:
            host_match = self._host_regex.match(_hostname(host))
            if host_match is None:
                return Match.NONE, {}
            params.update(_convert(host_match.groupdict(), self._host_convertors))

        path_match = self._path_regex.match(join_uri(path))
        if path_match is None:
            return Match.NONE, {}
        params.update(_convert(path_match.groupdict(), self._path_convertors))

        if not self.allows(method):
            return Match.PARTIAL, params
        return Match.FULL, params

    def claims(self, path: str, host: str) -> bool:
        """Whether a request to ``path`` on ``host`` belongs to this route's API.

        A domain-bound route claims every request to its domain, a prefixed
        route every path under its prefix; a route with neither claims only
        the paths it matches structurally. Domain and prefix must both hold
        when both are set.
        """
        if self._host_regex is not None and not self._host_regex.match(_hostname(host)):
            return False
        if self._prefix_regexes:
            rooted = join_uri(path)
            return any(regex.match(rooted) for regex in self._prefix_regexes)
        if self._host_regex is not None:
            return True
        return self._path_regex.match(join_uri(path)) is not None


def _hostname(host: str) -> str:
    """Lowercased host without port; IPv6 literals lose their brackets."""
    try:
        return URL(f"//{host}").hostname or ""
    except ValueError:
        return host.lower()


def _convert(values: dict[str, str], convertors: dict[str, Convertor[Any]]) -> dict[str, Any]:
    return {key: convertors[key].convert(value) for key, value in values.items()}


def methods_of(methods: Iterable[str | HTTPMethod]) -> frozenset[HTTPMethod]:
    """Normalize method names into a frozenset of HTTPMethod."""
    return frozenset(HTTPMethod(str(getattr(m, "value", m)).upper()) for m in methods)
