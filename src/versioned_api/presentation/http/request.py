"""Transport-neutral API request.

The router dispatches ``ApiRequest`` objects so that external traffic
(adapted from Starlette) and internal in-process requests go through the
same pipeline. ``internal`` marks requests issued by the internal
dispatcher; failures in those re-raise instead of being rendered.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from starlette.datastructures import URL, Headers, QueryParams
from starlette.requests import Request

DEFAULT_HOST = "localhost"


@dataclass(frozen=True, kw_only=True)
class ApiRequest:
    """Request as seen by the router.

    Attributes:
        method: Upper-case HTTP method.
        path: Rooted request path.
        host: Host header value (may include a port).
        headers: Case-insensitive request headers.
        query_params: Parsed query string.
        internal: True for requests issued in-process.
    """

    method: str
    path: str
    host: str = DEFAULT_HOST
    headers: Headers = field(default_factory=Headers)
    query_params: QueryParams = field(default_factory=QueryParams)
    internal: bool = False

    @property
    def accept(self) -> str | None:
        return self.headers.get("accept")

    @classmethod
    def create(
        cls,
        uri: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        *,
        internal: bool = False,
    ) -> "ApiRequest":
        """Build a request from a URI.

        Args:
            uri: Absolute URL or path (``http://api.foo.bar/users?page=2``
                or ``foo/bar``).
            method: HTTP method.
            headers: Request headers.
            internal: Mark the request as internal.

        Example:
            >>> request = ApiRequest.create("foo", headers={"accept": "application/json"})
            >>> request.path
            '/foo'
        """
        url = URL(uri)
        path = url.path if url.path.startswith("/") else f"/{url.path}"
        raw_headers = dict(headers or {})
        host = url.netloc or Headers(raw_headers).get("host") or DEFAULT_HOST
        return cls(
            method=method.upper(),
            path=path,
            host=host,
            headers=Headers(raw_headers),
            query_params=QueryParams(url.query),
            internal=internal,
        )

    @classmethod
    def from_starlette(cls, request: Request) -> "ApiRequest":
        """Adapt an incoming Starlette request."""
        return cls(
            method=request.method.upper(),
            path=request.url.path,
            host=request.headers.get("host") or request.url.netloc or DEFAULT_HOST,
            headers=request.headers,
            query_params=request.query_params,
        )
